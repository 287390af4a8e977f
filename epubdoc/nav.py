
from collections import namedtuple

from . import markup, utils

tocEntry = namedtuple('tocEntry', ['label', 'path', 'depth'])

EPUB_TYPE = '{http://www.idpf.org/2007/ops}type'

class epubNav:
	def __init__(self):
		self.title = ''
		self.toc = []

	def parse_ncx(self, ncx, ncxpath):
		def iter_node(node, depth=1):
			for point in markup.element_children(node):
				if markup.localname(point) != 'navPoint':
					continue
				label = markup.find_element_by_tag(point, 'text')
				content = markup.find_element_by_tag(point, 'content')
				target = content.get('src', '') if content is not None else ''
				yield markup.normalize_text(markup.text_content(label)), target, depth
				yield from iter_node(point, depth=depth+1)

		title = markup.find_element_by_tag(ncx, 'docTitle')
		self.title = markup.normalize_text(markup.text_content(title)) or self.title
		navmap = markup.find_element_by_tag(ncx, 'navMap')
		if navmap is None:
			return
		for label, target, depth in iter_node(navmap):
			if target:
				target = utils.realpath(target, ncxpath, keep_fragment=True)
			self.toc.append(tocEntry(label, target, depth))

	def parse(self, doc, docpath):
		def iter_node(node, depth=1):
			sublist = next((x for x in markup.element_children(node)
				if markup.localname(x) == 'ol'), None)
			if sublist is None:
				return
			for item in markup.element_children(sublist):
				if markup.localname(item) != 'li':
					continue
				target_node = next((x for x in markup.element_children(item)
					if markup.localname(x) in ('a', 'span')), None)
				if target_node is None: continue
				label = markup.normalize_text(markup.text_content(target_node))
				yield label, target_node.get('href', ''), depth
				yield from iter_node(item, depth=depth+1)

		nav = markup.find_element_by_attribute(doc, EPUB_TYPE, 'toc')
		if nav is None:
			nav = markup.find_element_by_tag(doc, 'nav')
		if nav is None:
			return
		heading = next((x for x in markup.element_children(nav)
			if markup.localname(x) in markup.HEADER_TAGS), None)
		self.title = markup.normalize_text(markup.text_content(heading))
		for label, target, depth in iter_node(nav):
			if target:
				target = utils.realpath(target, docpath, keep_fragment=True)
			self.toc.append(tocEntry(label, target, depth))
