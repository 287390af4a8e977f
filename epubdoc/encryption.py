
import binascii
import logging
import re
from hashlib import sha1
from urllib.parse import unquote

from . import markup

logger = logging.getLogger(__name__)

IDPF_OBFUSCATION = 'http://www.idpf.org/2008/embedding'
ADOBE_OBFUSCATION = 'http://ns.adobe.com/pdf/enc#RC'

def _xor_head(data, key, length):
	head = bytearray(data[:length])
	for index in range(len(head)):
		head[index] ^= key[index % len(key)]
	return bytes(head) + data[length:]

def idpf_obfuscation(data, uid):
	key = sha1(re.sub(r'[\x20\x09\x0d\x0a]', '', uid).encode('utf-8')).digest()
	return _xor_head(data, key, 1040)

def adobe_obfuscation(data, uid):
	key = re.sub(r'^urn:uuid:', '', uid.strip())
	key = re.sub(r'[^0-9A-Fa-f]', '', key)
	if len(key) < 32:
		return
	key = binascii.unhexlify(key[:32])
	return _xor_head(data, key, 1024)

ciphers = {
	IDPF_OBFUSCATION: idpf_obfuscation,
	ADOBE_OBFUSCATION: adobe_obfuscation
}


class epubDecryptor:
	"""Per-entry decoding driven by META-INF/encryption.xml.

	Only the font obfuscation algorithms are decodable; entries encrypted
	with anything else are reported as unreadable.
	"""
	def __init__(self):
		self.encryption = {}
		self.uid = ''

	def load_encryption(self, root):
		for enc_data in markup.find_elements_by_tag(root, 'EncryptedData'):
			method = markup.find_element_by_tag(enc_data, 'EncryptionMethod')
			ref = markup.find_element_by_tag(enc_data, 'CipherReference')
			if method is None or ref is None or not ref.get('URI'):
				continue
			algorithm = method.get('Algorithm', '')
			path = unquote(ref.get('URI'))
			if algorithm not in ciphers:
				logger.warning('%s is encrypted with unsupported algorithm %s', path, algorithm)
			self.encryption[path] = algorithm

	def is_encrypted(self, path):
		return path in self.encryption

	def can_decrypt(self, path):
		return self.encryption.get(path) in ciphers and bool(self.uid)

	def decrypt(self, path, data):
		if not self.is_encrypted(path):
			return data
		if not self.can_decrypt(path):
			return
		return ciphers[self.encryption[path]](data, self.uid)
