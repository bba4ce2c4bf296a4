# SPDX-License-Identifier: CC0-1.0

# XXX(tori): these methods are wonky, but save me from using `netifaces`;
# no problem with netifaces, but I would prefer to use only builtin modules

def get_mac_from_iface(ifname):
	# NOTE(tori): sysfs exposes the hardware address as colon separated hex,
	# which is simpler than an ioctl and works for interfaces without an IPv4
	# address, which is the usual case for a DHCPv6 server
	if isinstance(ifname, bytes):
		ifname = ifname.decode('utf-8')
	path = '/sys/class/net/%s/address' % ifname
	with open(path) as address_file:
		address = address_file.read().strip()
	return bytes.fromhex(address.replace(':', ''))

def list_ifaces():
	return __import__('os').listdir('/sys/class/net')

def multicast_listen(target_address, target_port, target_type,
	target_family=None, bind_address=None, interface=None):
	socket = __import__('socket')
	struct = __import__('struct')
	if isinstance(interface, bytes):
		interface = interface.decode('utf-8')
	if interface is None:
		interface_index = 0
	else:
		interface_index = socket.if_nametoindex(interface)
	addrinfos = socket.getaddrinfo(target_address, target_port)
	for addrinfo in addrinfos:
		family, type_, proto, canonname, sockaddr = addrinfo
		if ((family == target_family or target_family is None)
			and (type_ == target_type)):
			sock = socket.socket(family, type_, proto)
			sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
			if bind_address is None:
				bind_address = ''
			sock.bind((bind_address, target_port))
			group = socket.inet_pton(family, sockaddr[0])
			if family == socket.AF_INET:
				request = group + struct.pack('=I', socket.INADDR_ANY)
				sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP,
					request)
			elif family == socket.AF_INET6:
				# NOTE(tori): link scoped groups need the interface index,
				# zero lets the kernel pick one
				request = group + struct.pack('@I', interface_index)
				sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_JOIN_GROUP,
					request)
			else:
				raise Exception('bad address family')
			return sock
	else:
		raise Exception('could not listen')

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
