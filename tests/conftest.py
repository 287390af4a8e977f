from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Callable

import pytest

BOOK_UID = "urn:uuid:12345678-1234-1234-1234-123456789abc"

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{rootfile}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

PACKAGE_OPF = f"""<?xml version="1.0" encoding="utf-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="BookId">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="BookId">{BOOK_UID}</dc:identifier>
    <dc:title>Sample Book</dc:title>
    <dc:creator>Jane Doe</dc:creator>
    <dc:language>en</dc:language>
    <dc:description>A small book used by the tests.</dc:description>
    <meta name="cover" content="im1"/>
  </metadata>
  <manifest>
    <!-- navigation documents -->
    <item id="nav" href="nav.xhtml" media-type="application/xhtml+xml" properties="nav"/>
    <item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <item id="c1" href="chap1.html" media-type="text/html"/>
    <item id="c2" href="Text/chap2.xhtml" media-type="application/xhtml+xml"/>
    <item id="css" href="Styles/style.css" media-type="text/css"/>
    <item id="im1" href="img/cover.jpg" media-type="image/jpeg"/>
  </manifest>
  <spine toc="ncx">
    <itemref idref="c1"/>
    <!-- the first chapter is read twice -->
    <itemref idref="c2"/>
    <itemref idref="c1"/>
  </spine>
</package>
"""

CHAPTER_ONE = b"""<html><head><title>Ch 1</title></head><body>
<h1>Chapter One</h1>
<!-- editorial note -->
<p>First   paragraph.</p>
<div><p>Nested <b>bold</b> text.</p></div>
<p>   </p>
<ul><li>Item <em>one</em></li></ul>
</body></html>
"""

CHAPTER_TWO = b"""<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml">
<head>
  <title>Chapter Two</title>
  <link rel="stylesheet" type="text/css" href="../Styles/style.css"/>
</head>
<body>
  <h2 id="sec">Chapter Two</h2>
  <p>Second chapter text.</p>
  <p><img src="../img/cover.jpg" alt="cover"/></p>
  <p><a href="http://example.com/">elsewhere</a></p>
</body>
</html>
"""

STYLESHEET = b"""body { background: url(../img/bg.png) }
@font-face { font-family: Body; src: url("../fonts/body.otf") }
"""

NAV_XHTML = b"""<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops">
<body>
  <nav epub:type="toc">
    <h1>Contents</h1>
    <ol>
      <li><a href="chap1.html">Chapter One</a>
        <ol><li><a href="Text/chap2.xhtml#sec">Section</a></li></ol>
      </li>
      <li><span>Appendix</span></li>
    </ol>
  </nav>
</body>
</html>
"""

TOC_NCX = b"""<?xml version="1.0" encoding="utf-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <docTitle><text>Sample Book</text></docTitle>
  <navMap>
    <navPoint id="p1">
      <navLabel><text>Chapter One</text></navLabel>
      <content src="chap1.html"/>
      <navPoint id="p2">
        <navLabel><text>Section</text></navLabel>
        <content src="Text/chap2.xhtml#sec"/>
      </navPoint>
    </navPoint>
    <navPoint id="p3">
      <navLabel><text>Chapter Two</text></navLabel>
      <content src="Text/chap2.xhtml"/>
    </navPoint>
  </navMap>
</ncx>
"""

COVER_JPEG = b"\xff\xd8\xff\xe0fake-jpeg-data\xff\xd9"


def write_epub(
    path: Path,
    files: dict[str, bytes | str],
    *,
    rootfile: str | None = "OEBPS/content.opf",
    mimetype: bytes = b"application/epub+zip",
) -> Path:
    with zipfile.ZipFile(path, "w") as epub:
        epub.writestr("mimetype", mimetype, zipfile.ZIP_STORED)
        if rootfile is not None:
            epub.writestr("META-INF/container.xml", CONTAINER_XML.format(rootfile=rootfile))
        for name, data in files.items():
            epub.writestr(name, data, zipfile.ZIP_DEFLATED)
    return path


def sample_files(opf: str = PACKAGE_OPF, base: str = "OEBPS/") -> dict[str, bytes | str]:
    return {
        base + "content.opf": opf,
        base + "nav.xhtml": NAV_XHTML,
        base + "toc.ncx": TOC_NCX,
        base + "chap1.html": CHAPTER_ONE,
        base + "Text/chap2.xhtml": CHAPTER_TWO,
        base + "Styles/style.css": STYLESHEET,
        base + "img/cover.jpg": COVER_JPEG,
    }


@pytest.fixture
def make_epub(tmp_path: Path) -> Callable[..., Path]:
    counter = iter(range(1000))

    def _make(files: dict[str, bytes | str] | None = None, **kwargs) -> Path:
        path = tmp_path / f"book-{next(counter)}.epub"
        return write_epub(path, sample_files() if files is None else files, **kwargs)

    return _make


@pytest.fixture
def sample_epub(make_epub: Callable[..., Path]) -> Path:
    return make_epub()
