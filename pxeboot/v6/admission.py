# SPDX-License-Identifier: MIT

"""Rules deciding which DHCPv6 requests this server answers."""

__all__ = ['DiscardCause', 'DiscardReason', 'should_discard']

import enum

from .message import MessageType
from .rfc8415 import RFC8415OptionType


@enum.unique
class DiscardCause(enum.Enum):
	BOOTFILE_URL_NOT_REQUESTED = 'not-requested-boot-url'
	MISSING_CLIENT_ID = 'missing-client-id'
	UNEXPECTED_SERVER_ID = 'unexpected-server-id'
	MISSING_SERVER_ID = 'missing-server-id'
	SERVER_ID_MISMATCH = 'server-id-mismatch'
	IA_OPTION_PRESENT = 'ia-option-present'
	UNKNOWN_MESSAGE_TYPE = 'unknown-message-type'


class DiscardReason:
	def __init__(self, cause, message):
		self.cause = DiscardCause(cause)
		self.message = message

	def __str__(self):
		return self.message

	def __repr__(self):
		return '%s(%s, %r)' % (type(self).__name__, self.cause.name,
			self.message)


def server_id_matches(packet, server_duid):
	return packet.options.raw(RFC8415OptionType.SERVERID) == server_duid


def server_id_mismatch(packet, server_duid):
	return DiscardReason(DiscardCause.SERVER_ID_MISMATCH,
		'%r packet\'s server id option (%s) is different from ours (%s)' % (
			packet.message_name,
			packet.options.raw(RFC8415OptionType.SERVERID).hex(),
			server_duid.hex()))


def bootfile_url_not_requested(packet):
	return DiscardReason(DiscardCause.BOOTFILE_URL_NOT_REQUESTED,
		'%r packet doesn\'t request the boot file url option'
		% packet.message_name)


def missing_client_id(packet):
	return DiscardReason(DiscardCause.MISSING_CLIENT_ID,
		'%r packet has no client id option' % packet.message_name)


def discard_solicit(packet, server_duid):
	options = packet.options
	if not options.requested_bootfile_url():
		return bootfile_url_not_requested(packet)
	if not options.has_client_id():
		return missing_client_id(packet)
	if options.has_server_id():
		return DiscardReason(DiscardCause.UNEXPECTED_SERVER_ID,
			'%r packet has server id option' % packet.message_name)
	return None


def discard_request(packet, server_duid):
	options = packet.options
	if not options.requested_bootfile_url():
		return bootfile_url_not_requested(packet)
	if not options.has_client_id():
		return missing_client_id(packet)
	if not options.has_server_id():
		return DiscardReason(DiscardCause.MISSING_SERVER_ID,
			'%r packet has no server id option' % packet.message_name)
	if not server_id_matches(packet, server_duid):
		return server_id_mismatch(packet, server_duid)
	return None


def discard_information_request(packet, server_duid):
	options = packet.options
	if not options.requested_bootfile_url():
		return bootfile_url_not_requested(packet)
	if options.has_ia_na() or options.has_ia_ta():
		return DiscardReason(DiscardCause.IA_OPTION_PRESENT,
			'%r packet has an IA option present' % packet.message_name)
	if options.has_server_id() and not server_id_matches(packet, server_duid):
		return server_id_mismatch(packet, server_duid)
	return None


def discard_release(packet, server_duid):
	# XXX(tori): there is no release policy yet, every release is answered
	return None


DISCARD_RULES = {
	MessageType.SOLICIT: discard_solicit,
	MessageType.REQUEST: discard_request,
	MessageType.INFORMATION_REQUEST: discard_information_request,
	MessageType.RELEASE: discard_release,
}


def should_discard(packet, server_duid):
	"""Return why `packet` must not be answered, or None to answer it."""
	rules = DISCARD_RULES.get(packet.message_type)
	if rules is None:
		return DiscardReason(DiscardCause.UNKNOWN_MESSAGE_TYPE,
			'unknown packet: %r' % packet.message_name)
	return rules(packet, bytes(server_duid))

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
