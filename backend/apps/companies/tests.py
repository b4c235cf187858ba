from __future__ import annotations

import datetime

from django.apps import apps as django_apps
from django.test import TestCase

from rest_framework.test import APIClient

from apps.companies.models import Company
from apps.ngo.models import Program


class CompanyListTests(TestCase):
    def setUp(self):
        django_apps.get_app_config("ngo").gateway.fallback.reset()
        self.api_client = APIClient()

    def test_sample_companies_carry_their_programs(self):
        response = self.api_client.get("/api/companies")
        self.assertEqual(response.status_code, 200)
        companies = {c["company_id"]: c for c in response.json()}

        self.assertEqual(sorted(companies), [1, 2, 3])
        self.assertEqual([p["program_id"] for p in companies[1]["programs"]], ["PRG-004", "PRG-001"])
        self.assertEqual([p["program_id"] for p in companies[3]["programs"]], ["PRG-006", "PRG-003"])
        self.assertEqual(companies[3]["programs"][0]["category"], "education")

    def test_keyword_filters_companies(self):
        companies = self.api_client.get("/api/companies", {"keyword": "부산"}).json()
        self.assertEqual([c["company_name"] for c in companies], ["함께배움협회"])

    def test_programs_are_sorted_by_deadline_not_insertion(self):
        company = Company.objects.create(company_name="Hope", contact="02-000-0000", address="Seoul")
        other = Company.objects.create(company_name="Quiet", contact="", address="Daejeon")
        Program.objects.create(
            program_id="P2",
            program_name="Second deadline",
            company=company,
            end_date=datetime.date(2026, 12, 31),
        )
        Program.objects.create(
            program_id="P1",
            program_name="First deadline",
            company=company,
            end_date=datetime.date(2026, 6, 30),
        )

        companies = {c["company_id"]: c for c in self.api_client.get("/api/companies").json()}

        self.assertEqual([p["program_id"] for p in companies[company.company_id]["programs"]], ["P1", "P2"])
        self.assertEqual(companies[company.company_id]["programs"][0]["end_date"], "2026-06-30")
        self.assertEqual(companies[other.company_id]["programs"], [])
