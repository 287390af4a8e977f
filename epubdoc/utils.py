#coding: utf-8
import posixpath
from urllib.parse import urlparse, urlunparse, unquote

MIMETYPE = b'application/epub+zip'
CONTAINER_PATH = 'META-INF/container.xml'
ENCRYPTION_PATH = 'META-INF/encryption.xml'

META_TITLE = 'title'
META_LANG = 'language'
META_ID = 'identifier'
META_AUTHOR = 'creator'
META_DESC = 'description'

mimetypes = {
	'.css': 'text/css',
	'.xhtml': 'application/xhtml+xml',
	'.html': 'application/xhtml+xml',
	'.htm': 'text/html',
	'.jpg': 'image/jpeg',
	'.jpeg': 'image/jpeg',
	'.png': 'image/png',
	'.gif': 'image/gif',
	'.svg': 'image/svg+xml',
	'.ttf': 'application/font-sfnt',
	'.otf': 'application/font-sfnt',
	'.woff': 'application/font-woff',
	'.woff2': 'font/woff2',
	'.js': 'application/javascript',
	'.mp3': 'audio/mpeg',
	'.mp4': 'audio/mp4',
	'.smil': 'application/smil+xml',
	'.ncx': 'application/x-dtbncx+xml',
	'.opf': 'application/oebps-package+xml'
}

document_types = {'application/xhtml+xml', 'text/html'}
stylesheet_types = {'text/css'}

def content_base(rootfile:str):
	"""Directory prefix of the root file, up to and including the first '/'."""
	i = rootfile.find('/')
	if i < 0:
		return ''
	return rootfile[:i+1]

def is_external(url:str):
	urlp = urlparse(url)
	return bool(urlp.scheme or urlp.netloc)

def realpath(url:str, basepath:str, keep_fragment=False):
	"""Resolve a reference found inside ``basepath`` to a container path.

	Absolute urls are returned unchanged. The fragment is dropped unless
	``keep_fragment`` is set.
	"""
	urlp = urlparse(url)
	if urlp.scheme or urlp.netloc:
		return urlunparse(urlp)
	path = unquote(urlp.path)
	if path:
		basedir = basepath if basepath.endswith('/') else posixpath.dirname(basepath)
		path = posixpath.normpath(posixpath.join(basedir, path))
	else:
		path = basepath
	if keep_fragment and urlp.fragment:
		path += '#' + urlp.fragment
	return path

def strip_fragment(url:str):
	return url.split('#', 1)[0]

def filename(filepath:str):
	return posixpath.splitext(posixpath.basename(filepath).lower())

def guess_mimetype(filepath:str, default='application/octet-stream'):
	_, ext = filename(filepath)
	return mimetypes.get(ext, default)
