"""Tests for source field sanitizing helpers."""

from utils.cleaner import clean_str, sanitize_source_field


class TestCleanStr:
    def test_collapses_whitespace(self):
        assert clean_str("  IEC   60050-151 \n") == "IEC 60050-151"

    def test_empty_values_become_none(self):
        assert clean_str("") is None
        assert clean_str("   ") is None
        assert clean_str(None) is None


class TestSanitizeSourceField:
    def test_decodes_entities(self):
        assert sanitize_source_field("CEI&nbsp;60050-151") == "CEI 60050-151"

    def test_drops_markup(self):
        value = "Brochure sur le SI, 9<sup>e</sup> édition, 2019, Annexe 1"
        assert sanitize_source_field(value) == "Brochure sur le SI, 9e édition, 2019, Annexe 1"

    def test_drops_escaped_markup(self):
        assert sanitize_source_field("ISO/IEC/IEEE 24765:2010, &lt;i&gt;Vocabulary&lt;/i&gt;") == (
            "ISO/IEC/IEEE 24765:2010, Vocabulary"
        )

    def test_keeps_relation_glyphs(self):
        assert sanitize_source_field("&asymp; IEC 60050-151") == "≈ IEC 60050-151"

    def test_blank_input(self):
        assert sanitize_source_field("") is None
        assert sanitize_source_field("<br>") is None
