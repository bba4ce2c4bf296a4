# SPDX-License-Identifier: MIT

import io
import logging

import pytest

from pxeboot.v6.message import MessageType, DHCP
from pxeboot.v6.rfc5970 import RFC5970OptionType, ArchitectureType
from pxeboot.v6.server import (Server, configure_logging, parse_boot_file_map,
	parse_architectures, parse_duid)

from conftest import make_request, SERVER_DUID, CLIENT_DUID


@pytest.fixture
def server():
	return Server(logging.getLogger('pxeboot.tests'), SERVER_DUID)


def test_handle_solicit(server, solicit, caplog):
	caplog.set_level(logging.INFO)
	data = server.handle_packet(solicit.encode())
	response = DHCP.decode(data)
	assert response.message_type is MessageType.ADVERTISE
	assert response.transaction_id == solicit.transaction_id
	assert '%s - received SOLICIT, replying ADVERTISE' % CLIENT_DUID.hex() in (
		caplog.text)


def test_handle_request_legacy_message_type(request_packet):
	server = Server(logging.getLogger('pxeboot.tests'), SERVER_DUID,
		legacy_message_type=True)
	data = server.handle_packet(request_packet.encode())
	assert data[0] == MessageType.ADVERTISE


def test_handle_request_reply(server, request_packet):
	data = server.handle_packet(request_packet.encode())
	assert data[0] == MessageType.REPLY


def test_handle_discarded(server, solicit, caplog):
	caplog.set_level(logging.INFO)
	solicit.options[2] = SERVER_DUID
	assert server.handle_packet(solicit.encode()) is None
	assert 'unexpected-server-id' in caplog.text


def test_handle_malformed(server, caplog):
	assert server.handle_packet(b'\x01\x02') is None
	assert 'could not decode packet' in caplog.text
	assert server.handle_packet(b'\x01\x02\x03\x04\x00\x01\x00\x09') is None


def test_handle_missing_architecture(server, caplog):
	packet = make_request(MessageType.SOLICIT, arch=None)
	assert server.handle_packet(packet.encode()) is None
	assert 'could not handle SOLICIT' in caplog.text


def test_handle_odd_length_option_request_list(server, caplog):
	caplog.set_level(logging.INFO)
	data = (b'\x01\xaa\xbb\xcc\x00\x06\x00\x03\x00\x3b\x00'
		+ b'\x00\x01\x00\x04\x00\x03\x00\x01')
	assert server.handle_packet(data) is None
	assert 'discarding SOLICIT (not-requested-boot-url' in caplog.text
	assert 'could not handle' not in caplog.text


def test_handle_unknown_message_type(server, caplog):
	caplog.set_level(logging.INFO)
	assert server.handle_packet(b'\x63\x00\x00\x00') is None
	assert 'unknown-message-type' in caplog.text


def test_parse_boot_file_map():
	mapping = parse_boot_file_map(
		'16:http://[2001:db8::4]/bootx64.efi,0x7:tftp://[2001:db8::4]/a.efi')
	assert mapping == {
		ArchitectureType.EFI_X86_64_HTTP: 'http://[2001:db8::4]/bootx64.efi',
		ArchitectureType.EFI_X86_64: 'tftp://[2001:db8::4]/a.efi',
	}
	assert parse_boot_file_map(None) is None


def test_parse_architectures():
	assert parse_architectures('15,0x10,999') == frozenset({
		ArchitectureType.EFI_X86_HTTP, ArchitectureType.EFI_X86_64_HTTP, 999})


def test_parse_duid():
	assert parse_duid('00:03:00:01:52:54:00:12:34:56') == SERVER_DUID
	with pytest.raises(ValueError):
		parse_duid('00')


def test_configure_logging():
	output = io.StringIO()
	logger = configure_logging(output=output, level=logging.DEBUG)
	logger.debug('hello %s', 'world')
	line = output.getvalue().strip()
	assert line.endswith('|DEBUG|hello world')
	assert line.split('|')[1] == 'pxeboot.v6.server'

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
