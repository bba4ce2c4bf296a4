# SPDX-License-Identifier: MIT

import socket

from ..platform_specific import multicast_listen

# NOTE(tori): All_DHCP_Relay_Agents_and_Servers, link scoped
DHCP_ADDRESS = 'ff02::1:2'
DHCP_TYPE = socket.SOCK_DGRAM

DHCP_CLIENT_PORT = 546
DHCP_SERVER_PORT = 547


def listen(interface=None):
	return multicast_listen(DHCP_ADDRESS, DHCP_SERVER_PORT, DHCP_TYPE,
		target_family=socket.AF_INET6, interface=interface)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
