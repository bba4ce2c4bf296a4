# SPDX-License-Identifier: MIT

__all__ = ['Error', 'DHCPv6Error', 'MalformedPacket', 'MalformedOptions',
	'OptionsParseError', 'OptionsEncodeError', 'MissingOptionError']


class Error(Exception):
	"""Base class for pxeboot errors"""
	pass


class DHCPv6Error(Error):
	"""Base class for DHCPv6 errors"""
	pass


class MalformedPacket(DHCPv6Error):
	"""Packet too short or header unreadable"""
	pass


class MalformedOptions(MalformedPacket):
	"""Option section could not be parsed or serialized"""
	pass


class OptionsParseError(DHCPv6Error):
	pass


class OptionsEncodeError(DHCPv6Error):
	pass


class MissingOptionError(DHCPv6Error, KeyError):
	def __init__(self, option, message_type=None):
		super().__init__(option)
		self.option = option
		self.message_type = message_type

	def __str__(self):
		if self.message_type is None:
			return 'missing option %r' % self.option
		return '%r packet has no %r option' % (self.message_type, self.option)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
