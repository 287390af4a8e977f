import codecs
import logging
import re
from collections import namedtuple

from lxml import etree

logger = logging.getLogger(__name__)

HEADER_TAGS = ('h1', 'h2', 'h3', 'h4', 'h5', 'h6')
TEXT_TAGS = HEADER_TAGS + ('p', 'li', 'blockquote', 'pre', 'dt', 'dd')

textChunk = namedtuple('textChunk', ['tag', 'text', 'type'], defaults=('normal',))

_whitespace = re.compile(r'\s+')

# an explicit charset lets libxml2 pick the encoding; otherwise content is utf-8
_declared_charset = re.compile(rb'^\s*<\?xml[^>]*\bencoding\s*=|<meta[^>]+charset', re.I)
_boms = (codecs.BOM_UTF8, codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)

def _xml_parser():
	return etree.XMLParser(recover=True, no_network=True, resolve_entities=False)

def _html_encoding(data):
	if not isinstance(data, bytes):
		return None
	if data.startswith(_boms) or _declared_charset.search(data[:1024]):
		return None
	return 'utf-8'

def _html_parser(encoding=None):
	return etree.HTMLParser(encoding=encoding, recover=True, no_network=True,
		remove_comments=True)

def _parse(data, parser, kind):
	if not data:
		return None
	try:
		root = etree.fromstring(data, parser)
	except etree.XMLSyntaxError as e:
		logger.warning('unable to recover %s markup: %s', kind, e)
		return None
	if root is None:
		logger.warning('unable to recover %s markup', kind)
	return root

def parse_xml(data):
	return _parse(data, _xml_parser(), 'xml')

def parse_html(data):
	return _parse(data, _html_parser(_html_encoding(data)), 'html')

def localname(el):
	tag = el.tag
	if not isinstance(tag, str):
		return ''
	tag = tag.rsplit('}', 1)[-1]
	# recover mode keeps unbound prefixes in the tag name
	return tag.rsplit(':', 1)[-1]

def element_children(el):
	if el is None:
		return []
	return list(el.iterchildren(etree.Element))

def find_element_by_tag(root, tag):
	if root is None:
		return None
	for el in root.iter(etree.Element):
		if localname(el) == tag:
			return el

def find_elements_by_tag(root, tag):
	if root is None:
		return []
	return [el for el in root.iter(etree.Element) if localname(el) == tag]

def find_element_by_attribute(root, name, value):
	if root is None:
		return None
	for el in root.iter(etree.Element):
		if el.get(name) == value:
			return el

def text_content(el):
	if el is None:
		return None
	return etree.tostring(el, method='text', encoding='unicode', with_tail=False)

def normalize_text(text):
	return _whitespace.sub(' ', text or '').strip()

def extract_text_chunks(root, text_tags=TEXT_TAGS, header_tags=HEADER_TAGS):
	"""Collect one chunk per text-bearing element, in document order.

	Qualifying elements are not descended into, so a ``p`` inside an ``li``
	belongs to the ``li`` chunk.
	"""
	chunks = []
	if root is None:
		return chunks

	def walk(el):
		for child in el.iterchildren(etree.Element):
			tag = localname(child).lower()
			if tag not in text_tags:
				walk(child)
				continue
			text = normalize_text(text_content(child))
			if not text:
				continue
			kind = 'header' if tag in header_tags else 'normal'
			chunks.append(textChunk(tag, text, kind))

	walk(root)
	return chunks
