
import logging
import zipfile

from . import markup, utils
from .encryption import epubDecryptor
from .errors import epubArchiveError

logger = logging.getLogger(__name__)

class epubArchive:
	"""Read access to the entries of a zipped epub container."""
	def __init__(self, path, deobfuscate=True):
		self.path = path
		try:
			self.epub = zipfile.ZipFile(path, 'r')
		except (OSError, zipfile.BadZipFile) as e:
			raise epubArchiveError('unable to open %s: %s' % (path, e)) from e
		self.decryptor = self.load_encryption() if deobfuscate else None

	def __enter__(self):
		return self

	def __exit__(self, *exc):
		self.close()

	def close(self):
		self.epub.close()

	def list_files(self):
		return [name for name in self.epub.namelist() if not name.endswith('/')]

	def mimetype(self):
		try:
			return self.epub.read('mimetype').strip()
		except KeyError:
			return None

	def _read(self, path):
		try:
			return self.epub.read(path)
		except KeyError:
			return None
		except (zipfile.BadZipFile, OSError) as e:
			logger.warning('unable to read %s: %s', path, e)
			return None

	def read_entry(self, path):
		data = self._read(path)
		if data is None or self.decryptor is None:
			return data
		return self.decryptor.decrypt(path, data)

	def get_root_file(self):
		root = markup.parse_xml(self._read(utils.CONTAINER_PATH))
		for rootfile in markup.find_elements_by_tag(root, 'rootfile'):
			path = rootfile.get('full-path')
			if path:
				return path

	def load_encryption(self):
		data = self._read(utils.ENCRYPTION_PATH)
		if data is None:
			return
		decryptor = epubDecryptor()
		decryptor.load_encryption(markup.parse_xml(data))
		if decryptor.encryption:
			return decryptor
