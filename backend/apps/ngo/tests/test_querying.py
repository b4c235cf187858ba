from __future__ import annotations

import copy

from django.test import SimpleTestCase

from apps.ngo.services.querying import (
    CATEGORY_SCHEMA,
    DEFAULT_PROGRAM_SORT,
    DONOR_SCHEMA,
    ProgramQuery,
    RecordQuery,
    filter_companies,
    group_programs_by_company,
    next_numeric_id,
    query_programs,
    query_records,
    sort_programs,
)


def _program(program_id, **fields):
    record = {
        "program_id": program_id,
        "program_name": fields.pop("name", f"Program {program_id}"),
        "category": "others",
        "status": "planned",
        "start_date": None,
        "end_date": None,
        "total_amount": None,
        "company_id": None,
    }
    record.update(fields)
    return record


class ProgramQueryTests(SimpleTestCase):
    def test_defaults_for_missing_or_unknown_values(self):
        query = ProgramQuery.from_params({"category": "all", "status": "", "sort": "bogus"})
        self.assertEqual(query, ProgramQuery())
        self.assertEqual(query.sort, DEFAULT_PROGRAM_SORT)

    def test_values_are_normalized(self):
        query = ProgramQuery.from_params({"status": "진행 중", "category": "환경", "sort": "AMOUNT_DESC"})
        self.assertEqual(query.status, "running")
        self.assertEqual(query.category, "environment")
        self.assertEqual(query.sort, "amount_desc")

    def test_unresolvable_status_means_no_filter(self):
        self.assertIsNone(ProgramQuery.from_params({"status": "whatever"}).status)


class ProgramFilterSortTests(SimpleTestCase):
    def setUp(self):
        self.programs = [
            _program("PRG-1", name="Winter Shelter", category="animal", status="running",
                     start_date="2026-01-01", end_date="2026-06-30", total_amount=500),
            _program("PRG-2", name="Beach Cleanup", category="environment",
                     start_date="2026-03-01", end_date="2026-04-30", total_amount=None),
            _program("PRG-3", name="Coding Camp", category="education", status="running",
                     start_date=None, end_date="not a date", total_amount=1200),
            _program("PRG-4", name="Clinic", category="health",
                     start_date="2025-12-01", end_date=None, total_amount=800),
        ]

    def _ids(self, programs):
        return [p["program_id"] for p in programs]

    def test_keyword_matches_id_or_name_case_insensitively(self):
        query = ProgramQuery(keyword="beach")
        self.assertEqual(self._ids(query_programs(self.programs, query)), ["PRG-2"])
        query = ProgramQuery(keyword="prg-3")
        self.assertEqual(self._ids(query_programs(self.programs, query)), ["PRG-3"])

    def test_filters_are_conjunctive(self):
        query = ProgramQuery(status="running", category="education")
        self.assertEqual(self._ids(query_programs(self.programs, query)), ["PRG-3"])

    def test_deadline_sorts_put_undated_last_both_ways(self):
        self.assertEqual(self._ids(sort_programs(self.programs, "deadline_asc")), ["PRG-2", "PRG-1", "PRG-3", "PRG-4"])
        self.assertEqual(self._ids(sort_programs(self.programs, "deadline_desc")), ["PRG-1", "PRG-2", "PRG-3", "PRG-4"])

    def test_start_sort(self):
        self.assertEqual(self._ids(sort_programs(self.programs, "start_asc")), ["PRG-4", "PRG-1", "PRG-2", "PRG-3"])

    def test_missing_amount_counts_as_zero(self):
        self.assertEqual(self._ids(sort_programs(self.programs, "amount_asc")), ["PRG-2", "PRG-1", "PRG-4", "PRG-3"])
        self.assertEqual(self._ids(sort_programs(self.programs, "amount_desc")), ["PRG-3", "PRG-4", "PRG-1", "PRG-2"])

    def test_sort_is_stable_and_leaves_input_alone(self):
        programs = [_program(f"P{i}", end_date="2026-01-01") for i in range(5)]
        before = copy.deepcopy(programs)
        self.assertEqual(self._ids(sort_programs(programs, "deadline_desc")), ["P0", "P1", "P2", "P3", "P4"])
        self.assertEqual(programs, before)


class RecordQueryTests(SimpleTestCase):
    def setUp(self):
        self.donors = [
            {"donor_id": 2, "name": "Lee", "email": "lee@example.com", "phone": "010-2", "created_at": "2024-02-01"},
            {"donor_id": 10, "name": "Kim", "email": "kim@example.com", "phone": "010-10", "created_at": "2024-03-01"},
            {"donor_id": 1, "name": "Park", "email": "park@kim.org", "phone": None, "created_at": None},
        ]

    def _ids(self, records):
        return [r["donor_id"] for r in records]

    def test_default_donor_order_is_newest_id_first(self):
        query = RecordQuery.from_params({}, DONOR_SCHEMA)
        self.assertEqual(self._ids(query_records(self.donors, query, DONOR_SCHEMA)), [10, 2, 1])

    def test_search_field_restricts_search(self):
        query = RecordQuery.from_params({"keyword": "KIM", "searchField": "name"}, DONOR_SCHEMA)
        self.assertEqual(self._ids(query_records(self.donors, query, DONOR_SCHEMA)), [10])

    def test_unknown_search_field_searches_everything(self):
        query = RecordQuery.from_params({"keyword": "kim", "searchField": "password"}, DONOR_SCHEMA)
        self.assertEqual(query.search_field, "all")
        self.assertEqual(self._ids(query_records(self.donors, query, DONOR_SCHEMA)), [10, 1])

    def test_sort_fields(self):
        by_name = RecordQuery.from_params({"sortField": "name"}, DONOR_SCHEMA)
        self.assertEqual(self._ids(query_records(self.donors, by_name, DONOR_SCHEMA)), [10, 2, 1])
        newest = RecordQuery.from_params({"sort": "created_at"}, DONOR_SCHEMA)
        self.assertEqual(self._ids(query_records(self.donors, newest, DONOR_SCHEMA)), [10, 2, 1])
        unknown = RecordQuery.from_params({"sortField": "password"}, DONOR_SCHEMA)
        self.assertEqual(unknown.sort_field, "donor_id")

    def test_category_ids_sort_numerically(self):
        categories = [{"category_id": "10", "category_name": "b"}, {"category_id": "9", "category_name": "a"}]
        query = RecordQuery.from_params({}, CATEGORY_SCHEMA)
        result = query_records(categories, query, CATEGORY_SCHEMA)
        self.assertEqual([c["category_id"] for c in result], ["9", "10"])

    def test_non_ascii_digit_ids_sort_as_text(self):
        categories = [{"category_id": "²", "category_name": "c"}, {"category_id": "10", "category_name": "b"}, {"category_id": "9", "category_name": "a"}]
        query = RecordQuery.from_params({}, CATEGORY_SCHEMA)
        result = query_records(categories, query, CATEGORY_SCHEMA)
        self.assertEqual([c["category_id"] for c in result], ["9", "10", "²"])

    def test_next_numeric_id(self):
        self.assertEqual(next_numeric_id(["1", "7", "edu", 3]), "8")
        self.assertEqual(next_numeric_id([]), "1")
        self.assertEqual(next_numeric_id(["²", "3", "-5", " 4 "]), "5")


class CompanyGroupingTests(SimpleTestCase):
    def test_programs_are_deduplicated_and_sorted_by_deadline(self):
        companies = [
            {"company_id": 1, "company_name": "Alpha", "contact": "02-1", "address": "Seoul"},
            {"company_id": 2, "company_name": "Beta", "contact": "051-2", "address": "Busan"},
        ]
        programs = [
            _program("P2", company_id=1, end_date="2026-12-31"),
            _program("P1", company_id=1, end_date="2026-06-30"),
            _program("P2", company_id=1, end_date="2026-12-31", program_name="P2 renamed"),
            _program("P9", company_id=None, end_date="2026-01-01"),
        ]

        grouped = group_programs_by_company(companies, programs)

        self.assertEqual([p["program_id"] for p in grouped[0]["programs"]], ["P1", "P2"])
        self.assertEqual(grouped[0]["programs"][1]["program_name"], "P2 renamed")
        self.assertEqual(grouped[1]["programs"], [])
        self.assertNotIn("programs", companies[0])

    def test_keyword_matches_name_contact_or_address(self):
        companies = [
            {"company_id": 1, "company_name": "Alpha", "contact": "02-1", "address": "Seoul"},
            {"company_id": 2, "company_name": "Beta", "contact": "051-2", "address": "Busan"},
        ]
        self.assertEqual([c["company_id"] for c in filter_companies(companies, "busan")], [2])
        self.assertEqual([c["company_id"] for c in filter_companies(companies, "02-")], [1])
        self.assertEqual(len(filter_companies(companies, "  ")), 2)
