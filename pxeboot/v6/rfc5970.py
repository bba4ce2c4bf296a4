# SPDX-License-Identifier: MIT

__all__ = [
	# NOTE(tori): meat and potatoes of the module
	'RFC5970OptionType', 'rfc5970_option_codec',
	# NOTE(tori): other useful stuff
	'ArchitectureType', 'NetworkInterfaceType'
]

import enum
import struct

from .optiontypes import register as register_optiontype
from .option_codecs import register as register_optioncodec, Codec


@enum.unique
class RFC5970OptionType(enum.IntEnum):
	BOOTFILE_URL = 59
	BOOTFILE_PARAM = 60
	CLIENT_ARCH_TYPE = 61
	NII = 62


# NOTE(tori): processor architecture types come from the following:
# https://www.iana.org/assignments/dhcpv6-parameters/processor-architecture.csv
class ArchitectureType(enum.IntEnum):
	INTEL_X86PC = 0x00
	NEC_PC98 = 0x01
	EFI_ITANIUM = 0x02
	DEC_ALPHA = 0x03
	ARC_X86 = 0x04
	INTEL_LEAN_CLIENT = 0x05
	EFI_IA32 = 0x06
	EFI_X86_64 = 0x07
	EFI_XSCALE = 0x08
	EFI_BC = 0x09
	EFI_ARM32 = 0x0A
	EFI_ARM64 = 0x0B
	PPC_OPEN_FIRMWARE = 0x0C
	PPC_EPAPR = 0x0D
	PPC_OPAL = 0x0E
	EFI_X86_HTTP = 0x0F
	EFI_X86_64_HTTP = 0x10
	EFI_BC_HTTP = 0x11
	EFI_ARM32_HTTP = 0x12
	EFI_ARM64_HTTP = 0x13
	INTEL_X86PC_HTTP = 0x14


def encode_bootfile_url(decoded):
	return decoded.encode('utf-8')


def decode_bootfile_url(encoded):
	return encoded.decode('utf-8')


def encode_bootfile_param(decoded):
	encoded = b''
	for parameter in decoded:
		parameter = parameter.encode('utf-8')
		encoded += struct.pack('!H', len(parameter)) + parameter
	return encoded


def decode_bootfile_param(encoded):
	rest = encoded
	decoded = []
	while rest:
		if len(rest) < 2:
			raise ValueError('truncated boot file parameter: %r' % encoded)
		length, = struct.unpack_from('!H', rest)
		parameter, rest = rest[2:2 + length], rest[2 + length:]
		if len(parameter) != length:
			raise ValueError('truncated boot file parameter: %r' % encoded)
		decoded.append(parameter.decode('utf-8'))
	return tuple(decoded)


def encode_client_arch_type(decoded):
	try:
		types = tuple(decoded)
	except TypeError:
		types = (decoded,)
	encoded = b''.join(struct.pack('!H', type_) for type_ in types)
	if len(encoded) == 0:
		raise ValueError('no client system architectures defined')
	return encoded


def decode_client_arch_type(encoded):
	if len(encoded) == 0:
		raise ValueError('no client system architectures defined')
	if len(encoded)%2:
		raise ValueError('client system architectures have odd length: %r'
			% encoded)
	decoded = []
	for type_, in struct.iter_unpack('!H', encoded):
		try:
			type_ = ArchitectureType(type_)
		except ValueError:
			pass
		decoded.append(type_)
	return tuple(decoded)


class NetworkInterfaceType(enum.IntEnum):
	UNIVERSAL_NETWORK_DEVICE_IDENTIFIER = 1
	UNDI = 1


def encode_nii(decoded):
	type_, major, minor = decoded
	type_ = NetworkInterfaceType(type_)
	return struct.pack('!BBB', type_, major, minor)


def decode_nii(encoded):
	type_, major, minor = struct.unpack('!BBB', encoded)
	try:
		type_ = NetworkInterfaceType(type_)
	except ValueError:
		pass
	return type_, major, minor


rfc5970_option_codec = Codec(
	name='rfc5970',
	codecs={
		RFC5970OptionType.BOOTFILE_URL: (
			encode_bootfile_url,
			decode_bootfile_url
		),
		RFC5970OptionType.BOOTFILE_PARAM: (
			encode_bootfile_param,
			decode_bootfile_param
		),
		RFC5970OptionType.CLIENT_ARCH_TYPE: (
			encode_client_arch_type,
			decode_client_arch_type
		),
		RFC5970OptionType.NII: (
			encode_nii,
			decode_nii
		),
	}
)

register_optiontype(RFC5970OptionType)
register_optioncodec(rfc5970_option_codec)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
