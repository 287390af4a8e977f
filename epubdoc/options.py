
from . import markup

class epubReadOptions:
	# keep the parsed package description between metadata queries
	cache_package_tree = False
	# reject containers whose mimetype entry is not application/epub+zip
	check_mimetype = False
	deobfuscate_fonts = True
	text_tags = markup.TEXT_TAGS
	header_tags = markup.HEADER_TAGS

	def __init__(self, **overrides):
		for key, value in overrides.items():
			if not hasattr(type(self), key):
				raise TypeError('unknown read option %r' % key)
			setattr(self, key, value)
