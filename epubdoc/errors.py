
class epubError(Exception):
	pass

class epubArchiveError(epubError):
	"""The container could not be opened as an epub archive."""

class epubRootFileError(epubError):
	"""The package root file is missing from the container or unreadable."""
