# SPDX-License-Identifier: MIT

from ..optiontypes import TypeRegistry

# NOTE(tori): DHCPv6 option codes are 16 bits wide
registry = TypeRegistry(1 << 16)

register = registry.register
unregister = registry.unregister
get = registry.get
name = registry.name

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
