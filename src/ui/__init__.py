# Terminal UI Module
from .crt_effects import CRTOutput
from .command_parser import CommandTokenizer, TokenizedLine
from .message_reporter import MessageReporter

__all__ = ['CRTOutput', 'CommandTokenizer', 'TokenizedLine', 'MessageReporter']
