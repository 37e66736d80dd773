"""End-to-end tests for SOURCE field parsing."""

import asyncio
import logging

import pytest

from svc.source_models import CitationRecord, Relationship, RelationshipType
from svc.source_parser import SourceParser, parse_segment, parse_source_field, parse_source_field_async
from svc.source_splitter import CitationSegment, split_source_field


class TestParseSourceField:
    def test_iev_part_with_clause(self):
        records = parse_source_field("IEC 60050-151, 151-12-05")
        assert len(records) == 1
        record = records[0]
        assert record.reference == "IEC 60050-151"
        assert record.clause == "151-12-05"
        assert record.relationship == Relationship(type=RelationshipType.IDENTICAL)
        assert record.link is None
        assert record.original == "IEC 60050-151, 151-12-05"

    def test_modified_with_description(self):
        source = "IEC 62047-22:2014, 3.1.1, modified – In the definition, ..."
        (record,) = parse_source_field(source)
        assert record.reference == "IEC 62047-22:2014"
        assert record.clause == "3.1.1"
        assert record.relationship.type == RelationshipType.MODIFIED
        assert record.relationship.modification == "In the definition, ..."

    def test_em_dash_explanation_is_not_searched_for_clauses(self):
        (record,) = parse_source_field("IEC 62313:2009, modified — see 3.6 of the original")
        assert record.reference == "IEC 62313:2009"
        assert record.clause is None
        assert record.relationship.type == RelationshipType.MODIFIED
        assert record.relationship.modification == "see 3.6 of the original"

    def test_compound_field(self):
        first, second = parse_source_field("702-01-02 MOD,ITU-R Rec. 431 MOD")
        assert first.reference == "IEV"
        assert first.clause == "702-01-02"
        assert first.relationship.type == RelationshipType.MODIFIED
        assert second.reference == "ITU-R Recommendation 431"
        assert second.original == "ITU-R Rec. 431 MOD"
        assert second.relationship.type == RelationshipType.MODIFIED
        assert second.relationship.modification is None

    def test_vim(self):
        (record,) = parse_source_field("VIM 2.3.1")
        assert record.reference == "JCGM VIM"
        assert record.clause == "2.3.1"

    def test_unknown_document_falls_back(self, caplog):
        caplog.set_level(logging.WARNING, logger="iev_sources")
        (record,) = parse_source_field("Some Unknown Standard 99")
        assert record.reference == "Some Unknown Standard 99"
        assert "[FAILED TO PARSE SOURCE] Some Unknown Standard 99" in caplog.text

    def test_leading_figure_phrase_is_not_a_clause(self):
        (record,) = parse_source_field("voir fig. 4.9")
        assert record.clause is None
        assert record.relationship.type == RelationshipType.RELATED
        assert record.reference == "voir fig. 4.9"

    def test_glyph_classified_before_it_is_stripped(self):
        (record,) = parse_source_field("≈ IEC 60050-151, 151-12-05")
        assert record.relationship.type == RelationshipType.SIMILAR
        assert record.reference == "IEC 60050-151"
        assert record.original == "≈ IEC 60050-151, 151-12-05"

    def test_french_definition_form(self):
        (record,) = parse_source_field("définition 3.7 de la CEI 62127-1 MOD")
        assert record.reference == "IEC 62127-1"
        assert record.clause == "3.7"
        assert record.relationship.type == RelationshipType.MODIFIED

    def test_html_is_sanitized_first(self):
        (record,) = parse_source_field("Brochure sur le SI, 9<sup>e</sup> édition, 2019, Annexe 1")
        assert record.reference == "BIPM SI Brochure"
        assert record.clause == "Annexe 1"
        assert record.original == "Brochure sur le SI, 9e édition, 2019, Annexe 1"

    @pytest.mark.parametrize(
        "source",
        [
            "IEC 62303:2008, 3.1, modified and IEC 62302:2007, 3.2; IAEA 4",
            "702-09-44 MOD, 723-07-47, voir 723-10-91",
            "725-12-50, ITU RR 11",
            "Some Unknown Standard 99",
            "≠",
        ],
    )
    def test_one_non_empty_record_per_segment(self, source):
        records = parse_source_field(source)
        assert len(records) == len(split_source_field(source)) >= 1
        assert all(record.reference.strip() for record in records)

    def test_blank_source_is_rejected(self):
        with pytest.raises(ValueError):
            parse_source_field("   ")


class TestReferenceResolution:
    def test_link_is_attached(self, static_resolver):
        (record,) = parse_source_field("IEC 60050-151, 151-12-05", static_resolver)
        assert record.link == "https://webstore.iec.ch/publication/160"

    def test_unknown_reference_has_no_link(self, static_resolver):
        (record,) = parse_source_field("IAEA 4", static_resolver)
        assert record.link is None

    def test_lookup_failure_keeps_the_record(self, failing_resolver, caplog):
        caplog.set_level(logging.WARNING, logger="iev_sources")
        records = parse_source_field("725-12-50, ITU RR 11", failing_resolver)
        assert [r.reference for r in records] == ["IEV", "ITU RR"]
        assert all(r.link is None for r in records)
        assert failing_resolver.calls == ["IEV", "ITU RR"]
        assert "connection refused" in caplog.text

    def test_unexpected_resolver_error_keeps_the_record(self, failing_resolver_factory):
        resolver = failing_resolver_factory(RuntimeError("boom"))
        (record,) = parse_source_field("VIM 2.3.1", resolver)
        assert record.reference == "JCGM VIM"
        assert record.link is None


class TestParseSegment:
    def test_unexpected_failure_degrades_to_best_effort_record(self, monkeypatch, caplog):
        def explode(_text):
            raise RuntimeError("unexpected")

        monkeypatch.setattr("svc.source_parser.extract_clause", explode)
        caplog.set_level(logging.ERROR, logger="iev_sources")
        record = parse_segment(CitationSegment(text="IEC 60050-151, 151-12-05", position=0))
        assert record == CitationRecord(reference="IEC 60050-151, 151-12-05", original="IEC 60050-151, 151-12-05")
        assert "Failed to parse source segment" in caplog.text

    def test_glyphs_recorded_before_normalization_drive_classification(self, monkeypatch):
        recorded = []

        def fake_glyphs(text):
            recorded.append(text)
            return frozenset({"≠"})

        monkeypatch.setattr("svc.source_parser.detect_relation_glyphs", fake_glyphs)
        record = parse_segment(CitationSegment(text="IEC 60050-151, 151-12-05", position=0))
        assert recorded == ["IEC 60050-151, 151-12-05"]
        assert record.relationship.type == RelationshipType.NOT_EQUAL
        assert record.reference == "IEC 60050-151"


class TestSourceParser:
    def test_exposes_intermediate_state(self, static_resolver):
        parser = SourceParser("CEI 60050-151, 151-12-05; VIM 2.3.1", static_resolver)
        assert parser.raw_source == "CEI 60050-151, 151-12-05; VIM 2.3.1"
        assert [s.text for s in parser.segments] == ["CEI 60050-151, 151-12-05", "VIM 2.3.1"]
        assert parser.to_source_dicts() == [
            {
                "ref": "IEC 60050-151",
                "clause": "151-12-05",
                "link": "https://webstore.iec.ch/publication/160",
                "relationship": {"type": "identical"},
                "original": "CEI 60050-151, 151-12-05",
            },
            {
                "ref": "JCGM VIM",
                "clause": "2.3.1",
                "link": "https://www.bipm.org/en/committees/jc/jcgm/publications",
                "relationship": {"type": "identical"},
                "original": "VIM 2.3.1",
            },
        ]

    def test_rejects_empty_source(self):
        with pytest.raises(ValueError):
            SourceParser("")


class TestParseSourceFieldAsync:
    def test_matches_sequential_parsing(self, static_resolver):
        source = "702-09-44 MOD, 723-07-47, voir 723-10-91"
        records = asyncio.run(parse_source_field_async(source, static_resolver))
        assert records == parse_source_field(source, static_resolver)
        assert [r.original for r in records] == ["702-09-44 MOD", "723-07-47", "voir 723-10-91"]
