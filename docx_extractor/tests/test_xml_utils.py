"""Tests for XML part loading: encodings and namespace handling."""
import codecs
import unittest

from docx_extractor.tests.fixtures import W_NS
from docx_extractor.utils.errors import MalformedXmlError
from docx_extractor.utils.xml_utils import detect_encoding, get_attr, local_name, parse_xml, qn

SAMPLE = (
    '<?xml version="1.0" encoding="{encoding}"?>'
    f'<w:document xmlns:w="{W_NS}"><w:body><w:p><w:r><w:t>Grüße</w:t></w:r></w:p></w:body></w:document>'
)


class DetectEncodingTest(unittest.TestCase):
    """Byte-order marks and prolog declarations."""

    def test_boms(self) -> None:
        self.assertEqual(detect_encoding(codecs.BOM_UTF8 + b"<a/>"), ("utf-8", 3))
        self.assertEqual(detect_encoding(codecs.BOM_UTF16_LE + "<a/>".encode("utf-16-le")), ("utf-16-le", 2))
        self.assertEqual(detect_encoding(codecs.BOM_UTF16_BE + "<a/>".encode("utf-16-be")), ("utf-16-be", 2))

    def test_bomless_utf16_is_detected_from_prolog_bytes(self) -> None:
        self.assertEqual(detect_encoding('<?xml version="1.0"?>'.encode("utf-16-le"))[0], "utf-16-le")
        self.assertEqual(detect_encoding('<?xml version="1.0"?>'.encode("utf-16-be"))[0], "utf-16-be")

    def test_prolog_declaration(self) -> None:
        self.assertEqual(detect_encoding(b'<?xml version="1.0" encoding="ISO-8859-1"?><a/>'), ("iso-8859-1", 0))
        self.assertEqual(detect_encoding(b"<a/>"), ("utf-8", 0))


class ParseXmlTest(unittest.TestCase):
    """parse_xml behaviour."""

    def _text_of(self, data: bytes) -> str:
        tree = parse_xml(data)
        return tree.getroot().find(".//w:t", {"w": W_NS}).text

    def test_utf8(self) -> None:
        self.assertEqual(self._text_of(SAMPLE.format(encoding="UTF-8").encode("utf-8")), "Grüße")

    def test_utf16_with_bom(self) -> None:
        data = SAMPLE.format(encoding="UTF-16").encode("utf-16")
        self.assertEqual(self._text_of(data), "Grüße")

    def test_utf16_big_endian_without_bom(self) -> None:
        data = SAMPLE.format(encoding="UTF-16BE").encode("utf-16-be")
        self.assertEqual(self._text_of(data), "Grüße")

    def test_latin1_declaration(self) -> None:
        data = SAMPLE.format(encoding="ISO-8859-1").encode("latin-1")
        self.assertEqual(self._text_of(data), "Grüße")

    def test_unknown_encoding_is_malformed(self) -> None:
        with self.assertRaises(MalformedXmlError) as ctx:
            parse_xml(SAMPLE.format(encoding="no-such-codec").encode("utf-8"), part_name="word/document.xml")
        self.assertEqual(ctx.exception.part, "word/document.xml")

    def test_invalid_bytes_are_malformed(self) -> None:
        with self.assertRaises(MalformedXmlError):
            parse_xml(b'<?xml version="1.0" encoding="UTF-8"?><a>\xff\xfe\xfa</a>')

    def test_unclosed_tag_is_malformed(self) -> None:
        with self.assertRaises(MalformedXmlError):
            parse_xml(f'<w:document xmlns:w="{W_NS}"><w:body>'.encode("utf-8"))

    def test_custom_prefix_resolves_to_same_namespace(self) -> None:
        data = (
            f'<w2:document xmlns:w2="{W_NS}"><w2:body><w2:p><w2:r>'
            '<w2:t>Hi</w2:t></w2:r></w2:p></w2:body></w2:document>'
        ).encode("utf-8")
        root = parse_xml(data).getroot()
        self.assertEqual(root.tag, qn("w:document"))
        self.assertEqual(root.find("w:body/w:p/w:r/w:t", {"w": W_NS}).text, "Hi")


class HelperTest(unittest.TestCase):
    """Tag and attribute helpers."""

    def test_qn_and_local_name(self) -> None:
        self.assertEqual(qn("w:color"), f"{{{W_NS}}}color")
        self.assertEqual(local_name(qn("w:color")), "color")
        self.assertEqual(local_name("plain"), "plain")

    def test_get_attr(self) -> None:
        root = parse_xml(f'<w:color xmlns:w="{W_NS}" w:val="FF0000" other="x"/>'.encode("utf-8")).getroot()
        self.assertEqual(get_attr(root, "w:val"), "FF0000")
        self.assertEqual(get_attr(root, "other"), "x")
        self.assertIsNone(get_attr(None, "w:val"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
