"""Payment file decoders for different file formats"""

from .base import FileParser, TextDecoder
from .cfonb_parser import CFONBParser
from .mt101_parser import MT101Parser
from .xml_parser import XMLParser

__all__ = ['FileParser', 'TextDecoder', 'CFONBParser', 'MT101Parser', 'XMLParser']
