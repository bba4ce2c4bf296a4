# SPDX-License-Identifier: MIT

__all__ = ['TypeRegistry']


class TypeRegistry:
	"""Resolve raw option codes to the enumeration that defines them.

	Enumerations are tried in priority order; the first one accepting the
	code wins. Codes no enumeration knows about are returned unchanged when
	`ignore_unknown` is set.
	"""

	def __init__(self, ntypes=1 << 16):
		self.ntypes = ntypes
		self.OptionTypes = []

	def register(self, OptionType, priority=None):
		if priority is None:
			priority = len(self.OptionTypes)
		self.OptionTypes.insert(priority, OptionType)

	def unregister(self, OptionType):
		try:
			self.OptionTypes.remove(OptionType)
		except ValueError:
			pass

	def get(self, value, ignore_unknown=False):
		if value not in range(self.ntypes):
			raise ValueError('%r is out of range for option types' % (value,))
		for OptionType in self.OptionTypes:
			try:
				return OptionType(value)
			except ValueError:
				continue
		else:
			if ignore_unknown:
				return value
			else:
				raise ValueError(
					'%r is not a valid option for all registered option types'
					% value
				)

	def name(self, value):
		option = self.get(value, ignore_unknown=True)
		return getattr(option, 'name', str(option))

# NOTE(tori): option type enumerations SHOULD be of the format
# <name>OptionType and be a subclass of enum.IntEnum

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
