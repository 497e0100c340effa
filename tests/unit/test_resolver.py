"""Tests for voter resolution."""

from datetime import datetime

from app.models import DataSource
from etl.resolver import VoterResolver


class TestLookupOrder:
    def test_mapping_then_slug(self, persons, deputies):
        resolver = VoterResolver.build(persons, DataSource.NOSDEPUTES)
        assert resolver.resolve("amartin") == deputies["alice"]
        assert resolver.resolve("chloe-petit") == deputies["chloe"]
        assert resolver.resolve("alice-martin") == deputies["alice"]
        assert resolver.unresolved == []

    def test_case_insensitive(self, persons, deputies):
        resolver = VoterResolver.build(persons, DataSource.NOSDEPUTES)
        assert resolver.resolve("BDurand") == deputies["bob"]
        assert resolver.resolve(" Chloe-Petit ") == deputies["chloe"]

    def test_other_source_ignored(self, persons, deputies):
        persons.add_external_id(DataSource.WIKIDATA, "Q42", deputies["bob"])
        resolver = VoterResolver.build(persons, DataSource.NOSDEPUTES)
        assert resolver.resolve("Q42") is None

    def test_mapping_beats_slug(self, persons, deputies):
        # Bob's provider id collides with Chloé's own slug
        persons.add_external_id(DataSource.NOSDEPUTES, "chloe-petit", deputies["bob"])
        resolver = VoterResolver.build(persons, DataSource.NOSDEPUTES)
        assert resolver.resolve("chloe-petit") == deputies["bob"]


class TestTieBreak:
    def test_oldest_slug_wins(self, persons):
        newer = persons.add_person("Jean-Dupont", created_at=datetime(2022, 1, 1))
        older = persons.add_person("jean-dupont", created_at=datetime(2019, 1, 1))
        resolver = VoterResolver.build(persons, DataSource.NOSDEPUTES)
        assert resolver.resolve("jean-dupont") == older
        assert resolver.resolve("jean-dupont") != newer

    def test_oldest_mapping_wins(self, persons):
        first = persons.add_person("a", created_at=datetime(2020, 1, 1))
        second = persons.add_person("b", created_at=datetime(2020, 1, 1))
        persons.add_external_id(DataSource.NOSDEPUTES, "JDUPONT", second, created_at=datetime(2021, 1, 1))
        persons.add_external_id(DataSource.NOSDEPUTES, "jdupont", first, created_at=datetime(2020, 6, 1))
        resolver = VoterResolver.build(persons, DataSource.NOSDEPUTES)
        assert resolver.resolve("jdupont") == first

    def test_deterministic(self, persons, deputies):
        persons.add_person("homonyme", created_at=datetime(2020, 5, 5))
        persons.add_person("homonyme", created_at=datetime(2020, 5, 5))
        results = {VoterResolver.build(persons, DataSource.NOSDEPUTES).resolve("homonyme") for _ in range(5)}
        assert len(results) == 1


class TestUnresolved:
    def test_distinct_in_first_seen_order(self, persons, deputies):
        resolver = VoterResolver.build(persons, DataSource.NOSDEPUTES)
        for slug in ["zed", "amartin", "yann", "zed", "yann"]:
            resolver.resolve(slug)
        assert resolver.unresolved == ["zed", "yann"]

    def test_distinct_ignores_case(self, persons, deputies):
        resolver = VoterResolver.build(persons, DataSource.NOSDEPUTES)
        for slug in ["Inconnu", "inconnu", " INCONNU "]:
            resolver.resolve(slug)
        assert resolver.unresolved == ["Inconnu"]

    def test_lookup_has_no_side_effect(self, persons, deputies):
        resolver = VoterResolver.build(persons, DataSource.NOSDEPUTES)
        assert resolver.lookup("nobody") is None
        assert resolver.unresolved == []

    def test_len(self, persons, deputies):
        resolver = VoterResolver.build(persons, DataSource.NOSDEPUTES)
        assert len(resolver) == 5
