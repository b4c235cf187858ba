from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from shared.exceptions import Conflict

from .serializers import (
    CategoryCreateSerializer,
    DonorCreateSerializer,
    DonorSerializer,
    LoginSerializer,
    ProgramStatusSerializer,
)
from .services.auth import Authenticator
from .services.normalization import FINISHED, PLANNED, normalize_program
from .services.querying import (
    CATEGORY_SCHEMA,
    DONOR_SCHEMA,
    ProgramQuery,
    RecordQuery,
    next_numeric_id,
    query_programs,
    query_records,
)
from .services.stores import CATEGORIES, DONORS, PROGRAMS

logger = logging.getLogger(__name__)


class StoreView(APIView):
    """Base for views that read and write through the store gateway.

    ``gateway`` and ``admin`` are injected by the URL conf via ``as_view``.
    """

    permission_classes = [AllowAny]
    gateway = None
    admin = None


class DonorListCreateView(StoreView):
    def get(self, request):
        # A broken database is an error here, not a reason to show sample donors.
        listing = self.gateway.list(DONORS, fallback_on_error=False)
        query = RecordQuery.from_params(request.query_params, DONOR_SCHEMA)
        donors = query_records(listing.records, query, DONOR_SCHEMA)
        return Response(DonorSerializer(donors, many=True).data)

    def post(self, request):
        serializer = DonorCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        email = data.get("email")
        if email and self.gateway.find(DONORS, "email", email) is not None:
            raise Conflict(f"A donor with email {email} already exists.")

        donor = self.gateway.insert(DONORS, {
            "name": data["name"],
            "email": email,
            "phone": data.get("phone") or None,
            "password": data["password"],
        })
        logger.info("Registered donor %s", donor.get("donor_id"))
        return Response(DonorSerializer(donor).data, status=status.HTTP_201_CREATED)


class LoginView(StoreView):
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        principal = Authenticator(self.gateway, self.admin).authenticate(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        if principal is None:
            return Response({"error": "Invalid email or password."}, status=status.HTTP_401_UNAUTHORIZED)
        return Response(principal)


class CategoryListCreateView(StoreView):
    def get(self, request):
        listing = self.gateway.list(CATEGORIES)
        query = RecordQuery.from_params(request.query_params, CATEGORY_SCHEMA)
        return Response(query_records(listing.records, query, CATEGORY_SCHEMA))

    def post(self, request):
        serializer = CategoryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        category_id = data.get("category_id")
        if category_id is None:
            existing = self.gateway.list(CATEGORIES).records
            category_id = next_numeric_id(c.get("category_id") for c in existing)
        elif self.gateway.get(CATEGORIES, category_id) is not None:
            raise Conflict(f"Category {category_id} already exists.")

        category = self.gateway.insert(CATEGORIES, {
            "category_id": category_id,
            "category_name": data["category_name"],
            "description": data.get("description") or None,
        })
        return Response(category, status=status.HTTP_201_CREATED)


class CategoryDetailView(StoreView):
    def delete(self, request, category_id):
        if not self.gateway.delete(CATEGORIES, category_id):
            raise NotFound(f"Category {category_id} not found.")
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProgramMixin:
    def categories(self):
        return self.gateway.list(CATEGORIES).records

    def get_program(self, program_id):
        record = self.gateway.get(PROGRAMS, program_id)
        if record is None:
            raise NotFound(f"Program {program_id} not found.")
        return normalize_program(record, self.categories())


class ProgramListView(ProgramMixin, StoreView):
    def get(self, request):
        listing = self.gateway.list(PROGRAMS)
        categories = self.categories()
        programs = [normalize_program(record, categories) for record in listing.records]
        return Response(query_programs(programs, ProgramQuery.from_params(request.query_params)))


class ProgramDetailView(ProgramMixin, StoreView):
    def get(self, request, program_id):
        return Response(self.get_program(program_id))

    def delete(self, request, program_id):
        program_id = program_id.strip()
        if not program_id:
            raise ValidationError({"program_id": ["A program id is required."]})
        program = self.get_program(program_id)
        if program["status"] != PLANNED:
            raise Conflict(f"Only planned programs can be deleted; {program_id} is {program['status']}.")
        if not self.gateway.delete(PROGRAMS, program_id):
            raise NotFound(f"Program {program_id} not found.")
        logger.info("Deleted program %s", program_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProgramStatusView(ProgramMixin, StoreView):
    """Admin review: approve a planned program or send it back to planned."""

    def patch(self, request, program_id):
        serializer = ProgramStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        target = serializer.validated_data["status"]

        program = self.get_program(program_id)
        if program["status"] != PLANNED:
            raise Conflict(f"Only planned programs can change status; {program_id} is {program['status']}.")
        if target == FINISHED:
            raise Conflict("A planned program cannot be finished directly.")

        updated = self.gateway.update(PROGRAMS, program_id, {"status": target})
        if updated is None:
            raise NotFound(f"Program {program_id} not found.")
        logger.info("Program %s status %s -> %s", program_id, program["status"], target)
        return Response(normalize_program(updated, self.categories()))
