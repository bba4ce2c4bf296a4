"""PXE boot

DHCPv6 network boot responder

"""

__author__ = 'Tori Wolf <wiredwolf@wiredwolf.gg>'
__version__ = '0.1.0'
__date__ = '2026-10-19'
# SPDX-License-Identifier: MIT
__license__ = 'MIT'
__copyright__ = '2026 Tori Wolf'

try:
	from . import v6 as ipv6
except ImportError as e:
	print('Could not import pxeboot: %r' % e)
	raise

__all__ = ['ipv6']

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
