"""pxeboot.v6

DHCPv6 network boot messages, admission rules and replies

"""

__author__ = 'Tori Wolf <wiredwolf@wiredwolf.gg>'
__date__ = '2026-10-19'
# SPDX-License-Identifier: MIT
__license__ = 'MIT'
__copyright__ = '2026 Tori Wolf'

try:
	from .message import *
	from .message import __all__ as message_all
	from .rfc8415 import *
	from .rfc8415 import __all__ as rfc8415_all
	from .rfc5970 import *
	from .rfc5970 import __all__ as rfc5970_all
	from .admission import *
	from .admission import __all__ as admission_all
	from .response import *
	from .response import __all__ as response_all
	from .optiontypes import (register as register_type,
		unregister as unregister_type, get as get_option)
	from .option_codecs import (register as register_codec,
		unregister as unregister_codec, get as get_codec,
		encode as encode_option, decode as decode_option)
except ImportError as e:
	print('Could not import DHCPv6')
	raise

option_codecs_all = ['register_codec', 'unregister_codec', 'get_codec',
	'encode_option', 'decode_option']

optiontypes_all = ['register_type', 'unregister_type', 'get_option']

__all__ = [
	*message_all,
	*rfc8415_all,
	*rfc5970_all,
	*admission_all,
	*response_all,
	*option_codecs_all,
	*optiontypes_all
]

# NOTE(tori): rfc8415 - client/server exchanges only, no relays
# NOTE(tori): rfc5970 - done

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
