# SPDX-License-Identifier: MIT

__all__ = [
	'RFC8415OptionType', 'rfc8415_option_codec',
	'StatusCode', 'DUID', 'DUID_LLT', 'DUID_EN', 'DUID_LL', 'DUID_UUID',
	'IdentityAssociation', 'IAAddress', 'HARDWARE_TYPE_ETHERNET'
]

import enum
import struct
from ipaddress import IPv6Address
from uuid import UUID

from ..error import DHCPv6Error
from .optiontypes import register as register_optiontype, get as get_option
from .option_codecs import register as register_optioncodec, Codec

# NOTE(tori): hardware types come from the following:
# https://www.iana.org/assignments/arp-parameters/arp-parameters.xhtml
HARDWARE_TYPE_ETHERNET = 1


@enum.unique
class RFC8415OptionType(enum.IntEnum):
	CLIENTID = 1
	SERVERID = 2
	IA_NA = 3
	IA_TA = 4
	IAADDR = 5
	ORO = 6
	PREFERENCE = 7
	ELAPSED_TIME = 8
	RELAY_MSG = 9
	AUTH = 11
	UNICAST = 12
	STATUS_CODE = 13
	RAPID_COMMIT = 14
	USER_CLASS = 15
	VENDOR_CLASS = 16
	VENDOR_OPTS = 17
	INTERFACE_ID = 18
	RECONF_MSG = 19
	RECONF_ACCEPT = 20
	IA_PD = 25
	IAPREFIX = 26
	INFORMATION_REFRESH_TIME = 32
	SOL_MAX_RT = 82
	INF_MAX_RT = 83


@enum.unique
class StatusCode(enum.IntEnum):
	SUCCESS = 0
	UNSPEC_FAIL = 1
	NO_ADDRS_AVAIL = 2
	NO_BINDING = 3
	NOT_ON_LINK = 4
	USE_MULTICAST = 5
	NO_PREFIX_AVAIL = 6


class DUID:
	DUID_TYPE = None
	DUID_TYPES = {}

	def __init_subclass__(cls, /, duid_type):
		cls.DUID_TYPE = duid_type
		cls.__bases__[0].DUID_TYPES[duid_type] = cls

	@classmethod
	def decode(cls, duid):
		if len(duid) < 2:
			raise DHCPv6Error('DUID too short: %r' % duid)
		duid_type, = struct.unpack_from('!H', duid)
		try:
			DUIDType = cls.DUID_TYPES[duid_type]
		except KeyError:
			raise DHCPv6Error('unknown DUID type: %r' % duid_type) from None
		return DUIDType.decode(duid)

	def __eq__(self, other):
		if isinstance(other, DUID):
			return self.encode() == other.encode()
		if isinstance(other, (bytes, bytearray)):
			return self.encode() == bytes(other)
		return NotImplemented

	def __hash__(self):
		return hash(self.encode())

	def __bytes__(self):
		return self.encode()

	def __repr__(self):
		return '%s(%s)' % (type(self).__name__, self.encode().hex())


class DUID_LLT(DUID, duid_type=1):
	STRUCT = struct.Struct('!HHI')

	def __init__(self, hardware_type, time, link_layer_address):
		self.hardware_type = hardware_type
		self.time = time
		self.link_layer_address = bytes(link_layer_address)

	def encode(self):
		return (self.STRUCT.pack(1, self.hardware_type, self.time)
			+ self.link_layer_address)

	@classmethod
	def decode(cls, duid):
		duid_type, hardware_type, time = cls.STRUCT.unpack_from(duid)
		link_layer_address = duid[cls.STRUCT.size:]
		self = cls(hardware_type, time, link_layer_address)
		return self


class DUID_EN(DUID, duid_type=2):
	STRUCT = struct.Struct('!HI')

	def __init__(self, enterprise_number, identifier):
		self.enterprise_number = enterprise_number
		self.identifier = bytes(identifier)

	def encode(self):
		return self.STRUCT.pack(2, self.enterprise_number) + self.identifier

	@classmethod
	def decode(cls, duid):
		duid_type, enterprise_number = cls.STRUCT.unpack_from(duid)
		identifier = duid[cls.STRUCT.size:]
		self = cls(enterprise_number, identifier)
		return self


class DUID_LL(DUID, duid_type=3):
	STRUCT = struct.Struct('!HH')

	def __init__(self, hardware_type, link_layer_address):
		self.hardware_type = hardware_type
		self.link_layer_address = bytes(link_layer_address)

	def encode(self):
		return (self.STRUCT.pack(3, self.hardware_type)
			+ self.link_layer_address)

	@classmethod
	def decode(cls, duid):
		duid_type, hardware_type = cls.STRUCT.unpack_from(duid)
		link_layer_address = duid[cls.STRUCT.size:]
		self = cls(hardware_type, link_layer_address)
		return self


class DUID_UUID(DUID, duid_type=4):
	STRUCT = struct.Struct('!H16s')

	def __init__(self, uuid):
		if isinstance(uuid, (bytes, bytearray)):
			uuid = UUID(bytes=bytes(uuid))
		self.uuid = UUID(str(uuid))

	def encode(self):
		return self.STRUCT.pack(4, self.uuid.bytes)

	@classmethod
	def decode(cls, duid):
		duid_type, uuid = cls.STRUCT.unpack_from(duid)
		self = cls(uuid)
		return self


def encode_duid(decoded):
	if not isinstance(decoded, DUID):
		raise DHCPv6Error('%r is not a DUID' % decoded)
	return decoded.encode()


def decode_duid(encoded):
	try:
		return DUID.decode(encoded)
	except struct.error as e:
		raise DHCPv6Error('malformed DUID %r (caused by %s)'
			% (encoded, e)) from e


def _encode_nested(options):
	from .message import OptionMap

	if not isinstance(options, OptionMap):
		nested = OptionMap()
		for option, value in (options or {}).items():
			nested[option] = value
		options = nested
	return options.encode()


def _decode_nested(encoded):
	from .message import OptionMap

	return OptionMap.decode(encoded)


class IdentityAssociation:
	"""IA_NA option body: IAID, T1, T2 and the options it carries."""

	STRUCT = struct.Struct('!4sII')

	def __init__(self, iaid, t1=0, t2=0, options=None):
		iaid = bytes(iaid)
		if len(iaid) != 4:
			raise ValueError('IAID must be 4 bytes: %r' % iaid)
		self.iaid = iaid
		self.t1 = t1
		self.t2 = t2
		self.options = options

	def encode(self):
		return (self.STRUCT.pack(self.iaid, self.t1, self.t2)
			+ _encode_nested(self.options))

	@classmethod
	def decode(cls, encoded):
		if len(encoded) < cls.STRUCT.size:
			raise ValueError('IA_NA too short: %r' % encoded)
		iaid, t1, t2 = cls.STRUCT.unpack_from(encoded)
		options = _decode_nested(encoded[cls.STRUCT.size:])
		return cls(iaid, t1, t2, options)

	def __repr__(self):
		return '%s(iaid=%s, t1=%r, t2=%r, options=%r)' % (
			type(self).__name__, self.iaid.hex(), self.t1, self.t2,
			self.options)


class IAAddress:
	STRUCT = struct.Struct('!16sII')

	def __init__(self, address, preferred_lifetime, valid_lifetime,
		options=None):
		self.address = IPv6Address(address)
		self.preferred_lifetime = preferred_lifetime
		self.valid_lifetime = valid_lifetime
		self.options = options

	def encode(self):
		return (self.STRUCT.pack(self.address.packed, self.preferred_lifetime,
			self.valid_lifetime) + _encode_nested(self.options))

	@classmethod
	def decode(cls, encoded):
		if len(encoded) < cls.STRUCT.size:
			raise ValueError('IAADDR too short: %r' % encoded)
		address, preferred_lifetime, valid_lifetime = (
			cls.STRUCT.unpack_from(encoded))
		options = _decode_nested(encoded[cls.STRUCT.size:])
		return cls(address, preferred_lifetime, valid_lifetime, options)

	def __repr__(self):
		return '%s(%r, %r, %r)' % (type(self).__name__, str(self.address),
			self.preferred_lifetime, self.valid_lifetime)


def encode_option_request(decoded):
	return b''.join(struct.pack('!H', option) for option in decoded)


def decode_option_request(encoded):
	if len(encoded)%2:
		raise ValueError('option request list has odd length: %r' % encoded)
	return tuple(
		get_option(option, ignore_unknown=True)
		for option, in struct.iter_unpack('!H', encoded)
	)


def encode_status_code(decoded):
	code, message = decoded
	return struct.pack('!H', code) + message.encode('utf-8')


def decode_status_code(encoded):
	if len(encoded) < 2:
		raise ValueError('status code too short: %r' % encoded)
	code, = struct.unpack_from('!H', encoded)
	try:
		code = StatusCode(code)
	except ValueError:
		pass
	return code, encoded[2:].decode('utf-8')


def encode_vendor_class(decoded):
	enterprise_number, data = decoded
	encoded = struct.pack('!I', enterprise_number)
	for item in data:
		encoded += struct.pack('!H', len(item)) + bytes(item)
	return encoded


def decode_vendor_class(encoded):
	if len(encoded) < 4:
		raise ValueError('vendor class too short: %r' % encoded)
	enterprise_number, = struct.unpack_from('!I', encoded)
	rest = encoded[4:]
	data = []
	while rest:
		if len(rest) < 2:
			raise ValueError('truncated vendor class data: %r' % encoded)
		length, = struct.unpack_from('!H', rest)
		item, rest = rest[2:2 + length], rest[2 + length:]
		if len(item) != length:
			raise ValueError('truncated vendor class data: %r' % encoded)
		data.append(item)
	return enterprise_number, tuple(data)


def encode_unsigned(fmt):
	def encoder(decoded):
		return struct.pack(fmt, decoded)
	return encoder


def decode_unsigned(fmt):
	def decoder(encoded):
		value, = struct.unpack(fmt, encoded)
		return value
	return decoder


rfc8415_option_codec = Codec(
	name='rfc8415',
	codecs={
		RFC8415OptionType.CLIENTID: (
			encode_duid,
			decode_duid
		),
		RFC8415OptionType.SERVERID: (
			encode_duid,
			decode_duid
		),
		RFC8415OptionType.IA_NA: (
			IdentityAssociation.encode,
			IdentityAssociation.decode
		),
		RFC8415OptionType.IAADDR: (
			IAAddress.encode,
			IAAddress.decode
		),
		RFC8415OptionType.ORO: (
			encode_option_request,
			decode_option_request
		),
		RFC8415OptionType.PREFERENCE: (
			encode_unsigned('!B'),
			decode_unsigned('!B')
		),
		RFC8415OptionType.ELAPSED_TIME: (
			encode_unsigned('!H'),
			decode_unsigned('!H')
		),
		RFC8415OptionType.STATUS_CODE: (
			encode_status_code,
			decode_status_code
		),
		RFC8415OptionType.VENDOR_CLASS: (
			encode_vendor_class,
			decode_vendor_class
		),
	}
)

register_optiontype(RFC8415OptionType)
register_optioncodec(rfc8415_option_codec)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
