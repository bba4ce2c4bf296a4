# SPDX-License-Identifier: MIT

__all__ = ['MessageType', 'Option', 'OptionMap', 'DHCP']

import enum
import struct
from collections import namedtuple

# NOTE(tori): the rfc imports also register the option types and codecs, so
# don't remove them
from .rfc8415 import RFC8415OptionType
from .rfc5970 import RFC5970OptionType
from .optiontypes import get as get_option
from .option_codecs import encode as encode_option, decode as decode_option
from ..error import (MalformedPacket, MalformedOptions, OptionsParseError,
	OptionsEncodeError)


@enum.unique
class MessageType(enum.IntEnum):
	SOLICIT = 1
	ADVERTISE = 2
	REQUEST = 3
	CONFIRM = 4
	RENEW = 5
	REBIND = 6
	REPLY = 7
	RELEASE = 8
	DECLINE = 9
	RECONFIGURE = 10
	INFORMATION_REQUEST = 11
	RELAY_FORW = 12
	RELAY_REPL = 13


class Option(namedtuple('Option', ('code', 'value'))):
	__slots__ = ()

	@property
	def length(self):
		return len(self.value)


class OptionMap:
	"""Options of a single DHCPv6 message, keyed by option type.

	Values are stored encoded. Item access decodes through the registered
	option codec, `raw` returns the stored bytes. Each option type appears at
	most once; setting an option that is already present replaces it.
	"""

	OPTION_STRUCT = struct.Struct('!HH')
	MAX_LENGTH = 0xFFFF

	@staticmethod
	def check_options(options):
		if options is None:
			options = {}
		elif isinstance(options, OptionMap):
			options = {**options._options}
		elif isinstance(options, dict):
			options = {
				get_option(tag, ignore_unknown=True): bytes(value)
				for tag, value
				in options.items()
			}
		elif isinstance(options, list):
			opts = options
			options = {}
			for tag, value in opts:
				options[get_option(tag, ignore_unknown=True)] = bytes(value)
		else:
			raise TypeError('not supported: %r' % options)

		return options

	def __init__(self, values=None):
		self._options = self.check_options(values)

	def __getitem__(self, key):
		key = get_option(key, ignore_unknown=True)
		return decode_option(key, self._options.__getitem__(key),
			ignore_unknown=True)

	def __setitem__(self, key, value):
		key = get_option(key, ignore_unknown=True)
		self._options.__setitem__(key, encode_option(key, value,
			ignore_unknown=True))

	def __delitem__(self, key):
		key = get_option(key, ignore_unknown=True)
		self._options.__delitem__(key)

	def __contains__(self, key):
		key = get_option(key, ignore_unknown=True)
		return self._options.__contains__(key)

	def __iter__(self):
		return iter(self._options)

	def __len__(self):
		return len(self._options)

	def __eq__(self, other):
		if not isinstance(other, OptionMap):
			return NotImplemented
		return self._options == other._options

	def keys(self):
		return self._options.keys()

	def values(self):
		return self._options.values()

	def items(self):
		return self._options.items()

	def __repr__(self):
		return '%s(%r)' % (type(self).__name__, self._options)

	def get(self, key, default=None):
		key = get_option(key, ignore_unknown=True)
		value = self._options.get(key)
		if value is None:
			return default
		return decode_option(key, value, ignore_unknown=True)

	def raw(self, key):
		key = get_option(key, ignore_unknown=True)
		return self._options[key]

	def option(self, key):
		key = get_option(key, ignore_unknown=True)
		return Option(key, self._options[key])

	def add(self, option):
		code, value = option
		self._options[get_option(code, ignore_unknown=True)] = bytes(value)

	def requested(self, key):
		# NOTE(tori): a malformed option request list requests nothing
		try:
			requested = self.get(RFC8415OptionType.ORO, ())
		except ValueError:
			return False
		return key in requested

	def requested_bootfile_url(self):
		return self.requested(RFC5970OptionType.BOOTFILE_URL)

	def has_client_id(self):
		return RFC8415OptionType.CLIENTID in self

	def has_server_id(self):
		return RFC8415OptionType.SERVERID in self

	def has_ia_na(self):
		return RFC8415OptionType.IA_NA in self

	def has_ia_ta(self):
		return RFC8415OptionType.IA_TA in self

	def encode(self):
		option_bytes = b''
		for option_type, option_value in self._options.items():
			option_length = len(option_value)
			if option_length > self.MAX_LENGTH:
				raise OptionsEncodeError('option %r is too long (%d bytes)'
					% (option_type, option_length))
			try:
				option_bytes += self.OPTION_STRUCT.pack(option_type,
					option_length)
			except struct.error as e:
				raise OptionsEncodeError('bad option type %r (caused by %s)'
					% (option_type, e)) from e
			option_bytes += option_value
		return option_bytes

	@classmethod
	def decode(cls, option_bytes):
		rest = bytes(option_bytes)
		options = []
		while rest:
			if len(rest) < cls.OPTION_STRUCT.size:
				raise OptionsParseError('truncated option header: %r' % rest)
			option_type, option_length = cls.OPTION_STRUCT.unpack_from(rest)
			rest = rest[cls.OPTION_STRUCT.size:]
			option_value, rest = rest[:option_length], rest[option_length:]
			if len(option_value) != option_length:
				raise OptionsParseError(
					'option %r declares %d bytes, but only %d remain'
					% (option_type, option_length, len(option_value)))
			options.append((option_type, option_value))
		return cls(options)

	def asdict(self):
		return {**self._options}


class DHCP:
	HEADER_STRUCT = struct.Struct('!B3s')

	def __init__(self, *, message_type, transaction_id, options=None):
		transaction_id = bytes(transaction_id)
		if len(transaction_id) != 3:
			raise ValueError('transaction id must be 3 bytes: %r'
				% transaction_id)
		self.message_type = message_type
		self.transaction_id = transaction_id
		self.options = OptionMap(options)

	@property
	def message_name(self):
		return getattr(self.message_type, 'name', str(self.message_type))

	def __repr__(self):
		parts = [
			'message_type={message_type!r}'.format(
				message_type=self.message_type),
			'transaction_id={transaction_id}'.format(
				transaction_id=self.transaction_id.hex()),
			'options={options}'.format(options=self.options)
		]
		return '{cls}({parts})'.format(
			cls=type(self).__name__,
			parts=','.join(parts)
		)

	def encode(self, legacy_message_type=False):
		try:
			options = self.options.encode()
		except OptionsEncodeError as e:
			raise MalformedOptions('packet has malformed options section: %s'
				% e) from e

		# NOTE(tori): older deployments stamp every outgoing message as an
		# advertise, `legacy_message_type` keeps them working
		if legacy_message_type:
			message_type = MessageType.ADVERTISE
		else:
			message_type = self.message_type

		return self.HEADER_STRUCT.pack(message_type,
			self.transaction_id) + options

	@classmethod
	def decode(cls, packet):
		packet = bytes(packet)
		if len(packet) < cls.HEADER_STRUCT.size:
			raise MalformedPacket('packet too short: %d bytes' % len(packet))

		message_type, transaction_id = cls.HEADER_STRUCT.unpack_from(packet)
		try:
			message_type = MessageType(message_type)
		except ValueError:
			pass

		try:
			options = OptionMap.decode(packet[cls.HEADER_STRUCT.size:])
		except OptionsParseError as e:
			raise MalformedOptions('packet has malformed options section: %s'
				% e) from e

		self = cls(message_type=message_type, transaction_id=transaction_id,
			options=options)
		return self

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
