"""Tests for theme color scheme parsing."""
import unittest
from xml.etree import ElementTree as ET

from docx_extractor.model.color_model import RgbColor
from docx_extractor.parser.theme_parser import ThemeColors, ThemeParser
from docx_extractor.tests.fixtures import A_NS, theme_xml


class ThemeParserTest(unittest.TestCase):
    """Scheme slots and w:themeColor names."""

    def test_srgb_and_system_colors(self) -> None:
        xml = (
            f'<a:theme xmlns:a="{A_NS}"><a:themeElements><a:clrScheme name="Office">'
            '<a:dk1><a:sysClr val="windowText" lastClr="000000"/></a:dk1>'
            '<a:lt1><a:sysClr val="window" lastClr="FFFFFF"/></a:lt1>'
            '<a:accent1><a:srgbClr val="4472C4"/></a:accent1>'
            '<a:hlink><a:srgbClr val="bogus"/></a:hlink>'
            "</a:clrScheme></a:themeElements></a:theme>"
        )
        colors = ThemeParser(ET.ElementTree(ET.fromstring(xml))).parse()
        self.assertEqual(colors.resolve("text1"), RgbColor(0, 0, 0))
        self.assertEqual(colors.resolve("background1"), RgbColor(255, 255, 255))
        self.assertEqual(colors.resolve("light1"), RgbColor(255, 255, 255))
        self.assertEqual(colors.resolve("accent1"), RgbColor.from_hex("4472C4"))
        self.assertIsNone(colors.resolve("hyperlink"))

    def test_unknown_names_resolve_to_none(self) -> None:
        colors = ThemeParser(ET.ElementTree(ET.fromstring(theme_xml({"accent1": "4472C4"})))).parse()
        self.assertIsNone(colors.resolve("accent9"))
        self.assertIsNone(colors.resolve("none"))
        self.assertIsNone(colors.resolve(None))

    def test_theme_without_scheme(self) -> None:
        colors = ThemeParser(ET.ElementTree(ET.fromstring(f'<a:theme xmlns:a="{A_NS}"/>'))).parse()
        self.assertEqual(colors, ThemeColors())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
