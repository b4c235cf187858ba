from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.ngo.services.normalization import normalize_program
from apps.ngo.services.querying import filter_companies, group_programs_by_company
from apps.ngo.services.stores import CATEGORIES, COMPANIES, PROGRAMS


class CompanyListView(APIView):
    """Companies with the programs they run, nested and sorted by deadline."""

    permission_classes = [AllowAny]
    gateway = None

    def get(self, request):
        companies = self.gateway.list(COMPANIES).records
        categories = self.gateway.list(CATEGORIES).records
        programs = [normalize_program(p, categories) for p in self.gateway.list(PROGRAMS).records]
        companies = filter_companies(companies, request.query_params.get('keyword', ''))
        return Response(group_programs_by_company(companies, programs))
