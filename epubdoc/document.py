
import logging
from collections import namedtuple

from . import contentdocs, markup, utils
from .archive import epubArchive
from .errors import epubArchiveError, epubError, epubRootFileError
from .nav import epubNav
from .options import epubReadOptions

logger = logging.getLogger(__name__)

epubResource = namedtuple('epubResource', ['mime', 'uri'])

class epubDocument:
	"""Manifest, spine and metadata view of one epub package.

	Build instances with :meth:`load` or :meth:`from_archive`; both either
	return a fully initialised document or raise :class:`epubError`.
	"""
	def __init__(self, archive, rootfile, content, options=None):
		self.archive = archive
		self.rootfile = rootfile
		self.content = content
		self.content_base = utils.content_base(rootfile)
		self.options = options or epubReadOptions()

		self._resources = {}
		self._spine = ()
		self._cursor = 0
		self._tree = None

		opf = markup.parse_xml(content)
		self._load_manifest(markup.find_element_by_tag(opf, 'manifest'))
		self._load_spine(markup.find_element_by_tag(opf, 'spine'))
		if self.options.cache_package_tree:
			self._tree = opf

		if archive.decryptor is not None:
			archive.decryptor.uid = self.get_uid() or ''

		logger.debug('loaded %s: base %r, %d resources, %d spine items',
			rootfile, self.content_base, len(self._resources), len(self._spine))

	@classmethod
	def load(cls, path, options=None):
		options = options or epubReadOptions()
		archive = epubArchive(path, deobfuscate=options.deobfuscate_fonts)
		try:
			return cls.from_archive(archive, options=options)
		except Exception:
			archive.close()
			raise

	@classmethod
	def from_archive(cls, archive, options=None):
		options = options or epubReadOptions()
		if options.check_mimetype:
			mimetype = archive.mimetype()
			if mimetype != utils.MIMETYPE:
				raise epubArchiveError('unexpected mimetype %r' % mimetype)

		rootfile = archive.get_root_file()
		if not rootfile:
			raise epubRootFileError('no package root file declared in %s' % utils.CONTAINER_PATH)
		content = archive.read_entry(rootfile)
		if content is None:
			raise epubRootFileError('unable to read package root file %s' % rootfile)
		return cls(archive, rootfile, content, options=options)

	def __enter__(self):
		return self

	def __exit__(self, *exc):
		self.close()

	def close(self):
		self.archive.close()

	@property
	def path(self):
		return self.archive.path

	"package parsing"
	def _load_manifest(self, manifest):
		if manifest is None:
			logger.warning('%s has no manifest', self.rootfile)
			return
		for item in markup.element_children(manifest):
			iid = item.get('id')
			uri = self.content_base + (item.get('href') or '')
			self._resources[iid] = epubResource(mime=item.get('media-type'), uri=uri)

	def _load_spine(self, spine):
		if spine is None:
			logger.warning('%s has no spine', self.rootfile)
			return
		self._spine = tuple(itemref.get('idref') for itemref in markup.element_children(spine))

	def _package(self):
		if self._tree is not None:
			return self._tree
		tree = markup.parse_xml(self.content)
		if self.options.cache_package_tree:
			self._tree = tree
		return tree

	"resource registry"
	def get_resources(self):
		return dict(self._resources)

	def get_resource(self, iid):
		res = self._resources.get(iid)
		if res is None:
			return None
		return self.archive.read_entry(res.uri)

	def get_resource_by_path(self, path):
		return self.archive.read_entry(self.content_base + path)

	def get_resource_path(self, iid):
		res = self._resources.get(iid)
		if res is None:
			return None
		return res.uri

	def get_mime_by_id(self, iid):
		res = self._resources.get(iid)
		if res is None:
			return None
		return res.mime

	def get_mime_by_path(self, path):
		uri = self.content_base + path
		for res in self._resources.values():
			if res.uri == uri:
				return res.mime

	def get_resource_links(self, iid):
		"""Paths, relative to the content base, referenced by a document or stylesheet.

		The returned paths are suitable for :meth:`get_resource_by_path`.
		References that leave the content base are skipped.
		"""
		res = self._resources.get(iid)
		data = self.get_resource(iid)
		if data is None:
			return None
		mime = res.mime or utils.guess_mimetype(res.uri)
		if mime in utils.stylesheet_types:
			paths = contentdocs.css_links(data, res.uri)
		elif mime in utils.document_types:
			paths = contentdocs.html_links(data, res.uri)
		else:
			return []
		base = self.content_base
		return [path[len(base):] for path in paths
			if path.startswith(base) and not path.startswith('../')]

	"spine and reading position"
	def get_spine(self):
		return self._spine

	@property
	def n_pages(self):
		return len(self._spine)

	@property
	def page(self):
		return self._cursor

	def set_page(self, index):
		if not 0 <= index < len(self._spine):
			return False
		self._cursor = index
		return True

	def advance(self):
		if self._cursor + 1 < len(self._spine):
			self._cursor += 1

	def retreat(self):
		if self._cursor > 0:
			self._cursor -= 1

	def get_current_id(self):
		if not self._spine:
			return None
		return self._spine[self._cursor]

	def get_current(self):
		if not self._spine:
			return None
		return self.get_resource(self.get_current_id())

	def get_current_path(self):
		if not self._spine:
			return None
		return self.get_resource_path(self.get_current_id())

	def get_current_mime(self):
		if not self._spine:
			return None
		return self.get_mime_by_id(self.get_current_id())

	def resource_uri_to_chapter(self, uri):
		uri = utils.strip_fragment(uri)
		for index, iid in enumerate(self._spine):
			res = self._resources.get(iid)
			if res is not None and res.uri == uri:
				return index

	"metadata"
	def get_metadata(self, tag):
		metadata = markup.find_element_by_tag(self._package(), 'metadata')
		node = markup.find_element_by_tag(metadata, tag)
		if node is None:
			return None
		return markup.text_content(node)

	def get_cover(self):
		node = markup.find_element_by_attribute(self._package(), 'name', 'cover')
		if node is None:
			return None
		return node.get('content')

	def get_uid(self):
		root = self._package()
		if root is None:
			return None
		node = None
		key = root.get('unique-identifier')
		if key:
			node = markup.find_element_by_attribute(root, 'id', key)
		if node is None:
			metadata = markup.find_element_by_tag(root, 'metadata')
			node = markup.find_element_by_tag(metadata, utils.META_ID)
		if node is None:
			return None
		return markup.text_content(node).strip()

	"table of contents"
	def _load_nav(self):
		root = self._package()
		nav = epubNav()
		manifest = markup.find_element_by_tag(root, 'manifest')
		for item in markup.element_children(manifest):
			if 'nav' in (item.get('properties') or '').split():
				doc = self._parse_resource(item.get('id'))
				if doc is not None:
					nav.parse(doc, self.get_resource_path(item.get('id')))
				break
		if not nav.toc:
			spine = markup.find_element_by_tag(root, 'spine')
			ncx_id = spine.get('toc') if spine is not None else None
			ncx = self._parse_resource(ncx_id)
			if ncx is not None:
				nav.parse_ncx(ncx, self.get_resource_path(ncx_id))
		return nav

	def get_toc(self):
		return self._load_nav().toc

	def get_toc_title(self):
		return self._load_nav().title or None

	def _parse_resource(self, iid):
		if iid is None:
			return None
		data = self.get_resource(iid)
		if data is None:
			return None
		return markup.parse_xml(data)

	"text extraction"
	def get_text(self):
		return self._text_chunks(self.get_current())

	def get_text_by_id(self, iid):
		return self._text_chunks(self.get_resource(iid))

	def _text_chunks(self, data):
		if data is None:
			return None
		root = markup.parse_html(data)
		chunks = markup.extract_text_chunks(root,
			text_tags=self.options.text_tags, header_tags=self.options.header_tags)
		return iter(chunks)
