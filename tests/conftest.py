# SPDX-License-Identifier: MIT

import pytest

from pxeboot.v6.message import MessageType, OptionMap, DHCP
from pxeboot.v6.rfc8415 import RFC8415OptionType, DUID_LL
from pxeboot.v6.rfc5970 import RFC5970OptionType

SERVER_DUID = DUID_LL(1, b'\x52\x54\x00\x12\x34\x56').encode()
CLIENT_DUID = DUID_LL(1, b'\x52\x54\x00\xab\xcd\xef').encode()
TRANSACTION_ID = b'\x0a\x0b\x0c'
IA_NA = b'\x00\x00\x00\x2a' + b'\x00' * 8


def make_request(message_type, *, oro=(RFC5970OptionType.BOOTFILE_URL,),
	client_id=CLIENT_DUID, server_id=None, ia_na=IA_NA, arch=0x0010,
	**extra):
	options = OptionMap()
	if oro is not None:
		options[RFC8415OptionType.ORO] = oro
	if client_id is not None:
		options[RFC8415OptionType.CLIENTID] = client_id
	if server_id is not None:
		options[RFC8415OptionType.SERVERID] = server_id
	if ia_na is not None:
		options[RFC8415OptionType.IA_NA] = ia_na
	if arch is not None:
		options[RFC5970OptionType.CLIENT_ARCH_TYPE] = arch
	for option, value in extra.items():
		options[RFC8415OptionType[option.upper()]] = value
	return DHCP(message_type=message_type, transaction_id=TRANSACTION_ID,
		options=options)


@pytest.fixture
def solicit():
	return make_request(MessageType.SOLICIT)


@pytest.fixture
def request_packet():
	return make_request(MessageType.REQUEST, server_id=SERVER_DUID)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
