
import logging

import cssutils

from . import markup, utils

# broken stylesheets are common and never fatal
cssutils.log.setLevel(logging.CRITICAL)

doc_loaders = {
	'//link[@href]': 'href',
	'//map/area': 'href',
	'//img': 'src',
	'//audio|//video': 'src',
	'//audio/source|//video/source': 'src',
	'//script[@src]': 'src'
}

def _collect(urls, basepath):
	paths = []
	for url in urls:
		if not url or url.startswith('#') or utils.is_external(url):
			continue
		path = utils.realpath(url, basepath)
		if path not in paths:
			paths.append(path)
	return paths

def html_links(data, docpath):
	root = markup.parse_html(data)
	if root is None:
		return []
	urls = []
	for xpath, attr in doc_loaders.items():
		for el in root.xpath(xpath):
			urls.append(el.get(attr))
	return _collect(urls, docpath)

def css_links(data, sheetpath):
	sheet = cssutils.parseString(data, validate=False)
	return _collect(cssutils.getUrls(sheet), sheetpath)
