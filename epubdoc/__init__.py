from .archive import epubArchive
from .document import epubDocument, epubResource
from .errors import epubArchiveError, epubError, epubRootFileError
from .markup import textChunk
from .nav import tocEntry
from .options import epubReadOptions
from .utils import META_AUTHOR, META_DESC, META_ID, META_LANG, META_TITLE

__all__ = [
	'epubArchive', 'epubDocument', 'epubResource', 'epubReadOptions',
	'epubError', 'epubArchiveError', 'epubRootFileError',
	'textChunk', 'tocEntry',
	'META_AUTHOR', 'META_DESC', 'META_ID', 'META_LANG', 'META_TITLE'
]

def open_document(path, options=None):
	return epubDocument.load(path, options=options)
