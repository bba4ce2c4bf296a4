# SPDX-License-Identifier: MIT

"""Replies for admitted DHCPv6 network boot requests."""

__all__ = ['BootConfig', 'build_response']

import struct
from dataclasses import dataclass, field
from ipaddress import IPv6Address

from ..error import MissingOptionError
from .message import MessageType, OptionMap, DHCP
from .rfc8415 import (RFC8415OptionType, StatusCode, IdentityAssociation,
	IAAddress)
from .rfc5970 import RFC5970OptionType, ArchitectureType

DEFAULT_ADDRESS = IPv6Address('2001:db8:f00f:cafe::99')
DEFAULT_BOOT_URL = 'http://[2001:db8:f00f:cafe::4]/script.ipxe'
HTTP_CLIENT_BOOT_URL = 'http://[2001:db8:f00f:cafe::4]/bootx64.efi'

RELEASE_MESSAGE = 'Release received.'


@dataclass
class BootConfig:
	"""Addressing and boot values handed to every client."""
	address: IPv6Address = DEFAULT_ADDRESS
	preferred_lifetime: int = 27000
	valid_lifetime: int = 43200
	boot_files: dict = field(default_factory=lambda: {
		ArchitectureType.EFI_X86_64_HTTP: HTTP_CLIENT_BOOT_URL,
	})
	default_boot_file: str = DEFAULT_BOOT_URL
	http_client_architectures: frozenset = frozenset({
		ArchitectureType.EFI_X86_64_HTTP,
	})
	vendor_enterprise_number: int = 0
	vendor_class: bytes = b'HTTPClient'

	def __post_init__(self):
		self.address = IPv6Address(self.address)

	def boot_file(self, architecture):
		return self.boot_files.get(architecture, self.default_boot_file)


def require_option(request, option):
	try:
		return request.options.raw(option)
	except KeyError:
		raise MissingOptionError(option, request.message_type) from None


def get_client_architecture(request):
	raw = require_option(request, RFC5970OptionType.CLIENT_ARCH_TYPE)
	if len(raw) < 2:
		raise MissingOptionError(RFC5970OptionType.CLIENT_ARCH_TYPE,
			request.message_type)
	# NOTE(tori): clients list their architectures by preference, we only
	# look at the first one
	architecture, = struct.unpack_from('!H', raw)
	try:
		return ArchitectureType(architecture)
	except ValueError:
		return architecture


def get_iaid(request):
	ia_na = require_option(request, RFC8415OptionType.IA_NA)
	if len(ia_na) < 4:
		raise MissingOptionError(RFC8415OptionType.IA_NA,
			request.message_type)
	return ia_na[:4]


def add_identifiers(options, client_id, server_duid):
	options[RFC8415OptionType.CLIENTID] = client_id
	options[RFC8415OptionType.SERVERID] = server_duid


def add_address(options, iaid, config):
	address = IAAddress(config.address, config.preferred_lifetime,
		config.valid_lifetime)
	options[RFC8415OptionType.IA_NA] = IdentityAssociation(iaid, 0, 0, {
		RFC8415OptionType.IAADDR: address,
	})


def add_boot_options(options, architecture, config):
	if architecture in config.http_client_architectures:
		options[RFC8415OptionType.VENDOR_CLASS] = (
			config.vendor_enterprise_number, (config.vendor_class,))
	options[RFC5970OptionType.BOOTFILE_URL] = config.boot_file(architecture)


def make_address_response(request, message_type, server_duid, config):
	client_id = require_option(request, RFC8415OptionType.CLIENTID)
	iaid = get_iaid(request)
	architecture = get_client_architecture(request)

	options = OptionMap()
	options[RFC8415OptionType.CLIENTID] = client_id
	add_address(options, iaid, config)
	options[RFC8415OptionType.SERVERID] = server_duid
	add_boot_options(options, architecture, config)

	return DHCP(message_type=message_type,
		transaction_id=request.transaction_id, options=options)


def make_advertise(request, server_duid, config):
	return make_address_response(request, MessageType.ADVERTISE, server_duid,
		config)


def make_reply(request, server_duid, config):
	return make_address_response(request, MessageType.REPLY, server_duid,
		config)


def make_information_request_reply(request, server_duid, config):
	client_id = require_option(request, RFC8415OptionType.CLIENTID)
	architecture = get_client_architecture(request)

	options = OptionMap()
	add_identifiers(options, client_id, server_duid)
	add_boot_options(options, architecture, config)

	return DHCP(message_type=MessageType.REPLY,
		transaction_id=request.transaction_id, options=options)


def make_release_reply(request, server_duid, config):
	client_id = require_option(request, RFC8415OptionType.CLIENTID)

	options = OptionMap()
	add_identifiers(options, client_id, server_duid)
	options[RFC8415OptionType.STATUS_CODE] = (StatusCode.SUCCESS,
		RELEASE_MESSAGE)

	return DHCP(message_type=MessageType.REPLY,
		transaction_id=request.transaction_id, options=options)


RESPONSE_MAKERS = {
	MessageType.SOLICIT: make_advertise,
	MessageType.REQUEST: make_reply,
	MessageType.INFORMATION_REQUEST: make_information_request_reply,
	MessageType.RELEASE: make_release_reply,
}


def build_response(request, server_duid, config=None):
	"""Build the reply to an admitted request.

	Returns None for message types this server does not answer. Options the
	reply is derived from must be present, otherwise MissingOptionError is
	raised; run `should_discard` on the request first.
	"""
	if config is None:
		config = BootConfig()
	server_duid = bytes(server_duid)

	make_response = RESPONSE_MAKERS.get(request.message_type)
	if make_response is None:
		return None
	return make_response(request, server_duid, config)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
