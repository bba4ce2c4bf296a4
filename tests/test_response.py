# SPDX-License-Identifier: MIT

import struct
from ipaddress import IPv6Address

import pytest

from pxeboot.error import MissingOptionError
from pxeboot.v6.message import MessageType, DHCP
from pxeboot.v6.response import BootConfig, build_response
from pxeboot.v6.rfc8415 import RFC8415OptionType, StatusCode
from pxeboot.v6.rfc5970 import RFC5970OptionType, ArchitectureType

from conftest import (make_request, SERVER_DUID, CLIENT_DUID, TRANSACTION_ID,
	IA_NA)


def test_solicit_http_client(solicit):
	response = build_response(solicit, SERVER_DUID)
	assert response.message_type is MessageType.ADVERTISE
	assert response.transaction_id == TRANSACTION_ID
	assert list(response.options) == [
		RFC8415OptionType.CLIENTID,
		RFC8415OptionType.IA_NA,
		RFC8415OptionType.SERVERID,
		RFC8415OptionType.VENDOR_CLASS,
		RFC5970OptionType.BOOTFILE_URL,
	]
	assert response.options.raw(RFC8415OptionType.CLIENTID) == CLIENT_DUID
	assert response.options.raw(RFC8415OptionType.SERVERID) == SERVER_DUID
	assert response.options[RFC8415OptionType.VENDOR_CLASS] == (0,
		(b'HTTPClient',))
	assert response.options[RFC5970OptionType.BOOTFILE_URL].endswith(
		'bootx64.efi')


@pytest.mark.parametrize('arch', [ArchitectureType.INTEL_X86PC,
	ArchitectureType.EFI_X86_64, ArchitectureType.EFI_ARM64_HTTP, 0x1234])
def test_solicit_other_architecture(arch):
	response = build_response(make_request(MessageType.SOLICIT, arch=arch),
		SERVER_DUID)
	assert RFC8415OptionType.VENDOR_CLASS not in response.options
	assert response.options[RFC5970OptionType.BOOTFILE_URL].endswith(
		'script.ipxe')


def test_first_architecture_decides():
	packet = make_request(MessageType.SOLICIT,
		arch=(ArchitectureType.EFI_X86_64, ArchitectureType.EFI_X86_64_HTTP))
	response = build_response(packet, SERVER_DUID)
	assert response.options[RFC5970OptionType.BOOTFILE_URL].endswith(
		'script.ipxe')


def test_identity_association(solicit):
	response = build_response(solicit, SERVER_DUID)
	ia_na = response.options[RFC8415OptionType.IA_NA]
	assert ia_na.iaid == IA_NA[:4]
	assert (ia_na.t1, ia_na.t2) == (0, 0)
	address = ia_na.options[RFC8415OptionType.IAADDR]
	assert address.address == IPv6Address('2001:db8:f00f:cafe::99')
	assert address.preferred_lifetime == 27000
	assert address.valid_lifetime == 43200


def test_request_reply(request_packet):
	response = build_response(request_packet, SERVER_DUID)
	assert response.message_type is MessageType.REPLY
	assert RFC8415OptionType.IA_NA in response.options
	assert response.options[RFC5970OptionType.BOOTFILE_URL].endswith(
		'bootx64.efi')


def test_information_request_reply():
	packet = make_request(MessageType.INFORMATION_REQUEST, ia_na=None,
		arch=ArchitectureType.EFI_X86_64)
	response = build_response(packet, SERVER_DUID)
	assert response.message_type is MessageType.REPLY
	assert list(response.options) == [
		RFC8415OptionType.CLIENTID,
		RFC8415OptionType.SERVERID,
		RFC5970OptionType.BOOTFILE_URL,
	]


def test_release_reply():
	packet = make_request(MessageType.RELEASE, arch=None, ia_na=None)
	response = build_response(packet, SERVER_DUID)
	assert response.message_type is MessageType.REPLY
	assert response.transaction_id == TRANSACTION_ID
	status = response.options.raw(RFC8415OptionType.STATUS_CODE)
	assert len(status) == 19
	assert status[:2] == b'\x00\x00'
	assert status[2:] == b'Release received.'
	assert response.options[RFC8415OptionType.STATUS_CODE] == (
		StatusCode.SUCCESS, 'Release received.')


@pytest.mark.parametrize('message_type', [MessageType.CONFIRM,
	MessageType.RENEW, MessageType.DECLINE, MessageType.RELAY_FORW, 0xFF])
def test_no_response(message_type):
	assert build_response(make_request(message_type), SERVER_DUID) is None


@pytest.mark.parametrize('message_type, missing', [
	(MessageType.SOLICIT, 'client_id'),
	(MessageType.SOLICIT, 'ia_na'),
	(MessageType.SOLICIT, 'arch'),
	(MessageType.REQUEST, 'arch'),
	(MessageType.INFORMATION_REQUEST, 'arch'),
	(MessageType.RELEASE, 'client_id'),
])
def test_missing_option_fails_fast(message_type, missing):
	packet = make_request(message_type, **{missing: None})
	with pytest.raises(MissingOptionError) as excinfo:
		build_response(packet, SERVER_DUID)
	assert isinstance(excinfo.value, KeyError)


def test_short_architecture_fails_fast(solicit):
	solicit.options[RFC5970OptionType.CLIENT_ARCH_TYPE] = b'\x10'
	with pytest.raises(MissingOptionError):
		build_response(solicit, SERVER_DUID)


def test_information_request_does_not_need_ia_na():
	packet = make_request(MessageType.INFORMATION_REQUEST, ia_na=None)
	assert build_response(packet, SERVER_DUID) is not None


def test_injected_config():
	config = BootConfig(
		address='2001:db8:1::10',
		preferred_lifetime=60,
		valid_lifetime=120,
		boot_files={
			ArchitectureType.EFI_X86_64: 'tftp://[2001:db8:1::1]/ipxe.efi',
			ArchitectureType.EFI_ARM64_HTTP: 'http://[2001:db8:1::1]/a64.efi',
		},
		default_boot_file='http://[2001:db8:1::1]/menu.ipxe',
		http_client_architectures=frozenset({
			ArchitectureType.EFI_ARM64_HTTP}),
	)
	assert config.address == IPv6Address('2001:db8:1::10')

	response = build_response(make_request(MessageType.SOLICIT,
		arch=ArchitectureType.EFI_X86_64), SERVER_DUID, config)
	address = response.options[RFC8415OptionType.IA_NA].options[
		RFC8415OptionType.IAADDR]
	assert address.address == config.address
	assert (address.preferred_lifetime, address.valid_lifetime) == (60, 120)
	assert RFC8415OptionType.VENDOR_CLASS not in response.options
	assert response.options[RFC5970OptionType.BOOTFILE_URL] == (
		'tftp://[2001:db8:1::1]/ipxe.efi')

	response = build_response(make_request(MessageType.SOLICIT,
		arch=ArchitectureType.EFI_ARM64_HTTP), SERVER_DUID, config)
	assert RFC8415OptionType.VENDOR_CLASS in response.options
	assert response.options[RFC5970OptionType.BOOTFILE_URL] == (
		'http://[2001:db8:1::1]/a64.efi')

	response = build_response(make_request(MessageType.SOLICIT,
		arch=ArchitectureType.EFI_X86_64_HTTP), SERVER_DUID, config)
	assert RFC8415OptionType.VENDOR_CLASS not in response.options
	assert response.options[RFC5970OptionType.BOOTFILE_URL] == (
		'http://[2001:db8:1::1]/menu.ipxe')


def test_advertise_wire_format(solicit):
	data = build_response(solicit, SERVER_DUID).encode()
	assert data[:4] == bytes([MessageType.ADVERTISE]) + TRANSACTION_ID

	packet = DHCP.decode(data)
	url = packet.options.raw(RFC5970OptionType.BOOTFILE_URL)
	assert url == b'http://[2001:db8:f00f:cafe::4]/bootx64.efi'
	assert len(url) == 42
	ia_na = packet.options.raw(RFC8415OptionType.IA_NA)
	assert ia_na[:12] == IA_NA[:4] + b'\x00' * 8
	code, length = struct.unpack_from('!HH', ia_na, 12)
	assert (code, length) == (RFC8415OptionType.IAADDR, 24)
	assert ia_na[16:32] == IPv6Address('2001:db8:f00f:cafe::99').packed
	assert struct.unpack_from('!II', ia_na, 32) == (27000, 43200)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
