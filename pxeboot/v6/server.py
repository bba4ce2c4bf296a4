# SPDX-License-Identifier: MIT

import logging
import socket
from ipaddress import IPv6Address
from sys import stderr

from ..error import DHCPv6Error
from ..platform_specific import get_mac_from_iface, list_ifaces
from .admission import should_discard
from .listener import listen
from .message import DHCP as DHCPMessage
from .response import BootConfig, build_response
from .rfc5970 import ArchitectureType
from .rfc8415 import DUID_LL, HARDWARE_TYPE_ETHERNET, RFC8415OptionType


def get_client_id(packet):
	try:
		return packet.options.raw(RFC8415OptionType.CLIENTID).hex()
	except KeyError:
		return '<no client id>'


def make_server_duid(interface):
	return DUID_LL(HARDWARE_TYPE_ETHERNET, get_mac_from_iface(interface))


class Server:
	def __init__(self, logger, server_duid, config=None, interface=None,
		legacy_message_type=False):
		self.logger = logger
		self.server_duid = bytes(server_duid)
		if config is None:
			config = BootConfig()
		self.config = config
		self.interface = interface
		self.legacy_message_type = legacy_message_type
		self.socket = None

	def init_socket(self):
		self.socket = listen(self.interface)
		self.socket.settimeout(5)

	def handle_packet(self, data):
		try:
			request = DHCPMessage.decode(data)
		except DHCPv6Error as e:
			self.logger.error('could not decode packet (caused by %r)', e)
			return None

		client_id = get_client_id(request)
		request_name = request.message_name

		try:
			reason = should_discard(request, self.server_duid)
			if reason is not None:
				self.logger.info('%s - discarding %s (%s: %s)', client_id,
					request_name, reason.cause.value, reason)
				return None

			response = build_response(request, self.server_duid, self.config)
			if response is None:
				self.logger.debug('%s - not answering %s', client_id,
					request_name)
				return None

			data = response.encode(
				legacy_message_type=self.legacy_message_type)
		except (DHCPv6Error, ValueError) as e:
			self.logger.error('%s - could not handle %s (caused by %r)',
				client_id, request_name, e)
			return None

		self.logger.info('%s - received %s, replying %s', client_id,
			request_name, response.message_name)
		return data

	def handle_client(self):
		try:
			data, address = self.socket.recvfrom(65535)
		except socket.timeout:
			return

		self.logger.debug('received %d bytes from %s', len(data), address[0])
		response = self.handle_packet(data)
		if response is None:
			return

		self.socket.sendto(response, address)


def configure_logging(output='-', level='INFO'):
	if isinstance(output, str):
		if output == '-':
			log_handler = logging.StreamHandler(stderr)
		else:
			log_handler = logging.FileHandler(output)
	else:
		log_handler = logging.StreamHandler(output)

	log_format = '{asctime}|{name}|{levelname}|{message}'
	log_formatter = logging.Formatter(log_format, style='{')
	log_handler.setFormatter(log_formatter)

	logger = logging.Logger(__name__)
	logger.addHandler(log_handler)

	logger.setLevel(level)

	return logger


def parse_architecture(value):
	architecture = int(value, 0)
	try:
		return ArchitectureType(architecture)
	except ValueError:
		return architecture


def parse_boot_file_map(mapping):
	if mapping is None:
		return None

	# NOTE(tori): urls have colons of their own, only split on the first
	pairs = [pair.split(':', 1) for pair in mapping.split(',')]
	return {parse_architecture(arch): url for arch, url in pairs}


def parse_architectures(value):
	return frozenset(parse_architecture(arch) for arch in value.split(','))


def parse_duid(value):
	duid = bytes.fromhex(value.replace(':', ''))
	if len(duid) < 2:
		raise ValueError('DUID too short: %r' % value)
	return duid


def main():
	import argparse
	from textwrap import dedent

	defaults = BootConfig()

	parser = argparse.ArgumentParser()
	parser.add_argument('-f', '--log-file', default='-',
		type=argparse.FileType('w'), help='location to log messages')
	parser.add_argument('-l', '--log-level', default='INFO', choices=('ALL',
		'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'), type=str.upper,
		help='verbosity of log messages, in descending order')
	parser.add_argument('-d', '--duid', type=parse_duid, default=None,
		help='server DUID as hex; defaults to a DUID-LL of the interface')
	parser.add_argument('-a', '--address', type=IPv6Address,
		default=defaults.address, help='address handed out in IA_NA')
	parser.add_argument('--preferred-lifetime', type=int,
		default=defaults.preferred_lifetime,
		help='preferred lifetime of the handed out address, in seconds')
	parser.add_argument('--valid-lifetime', type=int,
		default=defaults.valid_lifetime,
		help='valid lifetime of the handed out address, in seconds')
	map_example = dedent("""\
	16:http://[2001:db8::4]/bootx64.efi,7:http://[2001:db8::4]/ipxe.efi
	These values are specified as their values defined for DHCPv6 option 61,
	and so the server would send `bootx64.efi` to UEFI x86-64 HTTP clients
	and `ipxe.efi` to UEFI x86-64 PXE clients. (see RFC5970)
	""")
	parser.add_argument('-m', '--boot-file-map', metavar='MAP',
		type=parse_boot_file_map, default=None,
		help='map of architecture types to boot file urls, e.g. %s'
		% map_example)
	parser.add_argument('-u', '--default-boot-url', metavar='URL',
		default=defaults.default_boot_file,
		help='boot file url for architectures missing from the map')
	parser.add_argument('--http-client-archs', metavar='ARCHS',
		type=parse_architectures, default=defaults.http_client_architectures,
		help='architecture types that get the HTTPClient vendor class')
	parser.add_argument('--legacy-message-type', action='store_true',
		help='stamp every reply as an advertise, like older deployments')
	parser.add_argument('interface', metavar='IF',
		choices=list_ifaces(),
		help='interface on which to bind: one of %(choices)s')
	args = parser.parse_args()

	target = args.log_file
	level = 0 if args.log_level == 'ALL' else getattr(logging, args.log_level)
	logger = configure_logging(output=target, level=level)

	try:
		server_duid = args.duid
		if server_duid is None:
			server_duid = make_server_duid(args.interface)
		boot_files = args.boot_file_map
		if boot_files is None:
			boot_files = defaults.boot_files
		config = BootConfig(
			address=args.address,
			preferred_lifetime=args.preferred_lifetime,
			valid_lifetime=args.valid_lifetime,
			boot_files=boot_files,
			default_boot_file=args.default_boot_url,
			http_client_architectures=args.http_client_archs
		)
		server = Server(logger, server_duid, config, args.interface,
			legacy_message_type=args.legacy_message_type)
		logger.info('if = %s, duid = %s, address = %s', args.interface,
			server.server_duid.hex(), config.address)
		server.init_socket()
		while True:
			try:
				server.handle_client()
			except KeyboardInterrupt:
				logger.info('shutting down')
				break
	except Exception as e:
		logger.error('unhandled server error (caused by %r)', e)
		if __debug__:
			raise e


if __name__ == '__main__':
	main()

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
