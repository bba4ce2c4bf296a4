# SPDX-License-Identifier: MIT

__all__ = ['CodecError', 'Codec', 'CodecRegistry', 'identity']


class CodecError(Exception):
	pass


def identity(value):
	return value


class Codec:
	"""Named table of (encoder, decoder) pairs keyed by option type."""

	def __init__(self, *, name=None, codecs=None):
		if name is None:
			name = 'codec_%s' % id(self)
		self.name = name
		if codecs is None:
			codecs = {}
		self.codecs = codecs

	def get_codec(self, option):
		try:
			return self.codecs[option]
		except KeyError:
			raise CodecError('option %r cannot be encoded by this codec (%s)'
				% (option, self.name)
			) from None

	def __repr__(self):
		return '%s(name=%r)' % (type(self).__name__, self.name)


class CodecRegistry:
	def __init__(self):
		self.option_codecs = []

	def register(self, option_codec, priority=None):
		if not isinstance(option_codec, Codec):
			raise CodecError('%r is not an instance of Codec' % option_codec)
		if priority is None:
			priority = len(self.option_codecs)
		self.option_codecs.insert(priority, option_codec)

	def unregister(self, option_codec):
		try:
			self.option_codecs.remove(option_codec)
		except ValueError:
			pass

	def get(self, option, ignore_unknown=True):
		for option_codec in self.option_codecs:
			try:
				return option_codec.get_codec(option)
			except CodecError:
				continue
		else:
			if ignore_unknown:
				return identity, identity
			else:
				raise CodecError(
					'%r is not a valid option for all registered option codecs'
					% option
				)

	def encode(self, option, value, ignore_unknown=True):
		encoder, decoder = self.get(option, ignore_unknown)
		# NOTE(tori): raw bytes always go through untouched, that way callers
		# can echo an option without understanding it
		if isinstance(value, (bytes, bytearray)):
			return bytes(value)
		return encoder(value)

	def decode(self, option, value, ignore_unknown=True):
		encoder, decoder = self.get(option, ignore_unknown)
		return decoder(value)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
