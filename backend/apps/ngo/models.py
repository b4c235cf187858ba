from __future__ import annotations

from django.db import models

from .services.normalization import CATEGORY_LABELS, STATUS_LABELS


class Donor(models.Model):
    donor_id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=255, unique=True, null=True, blank=True)
    phone = models.CharField(max_length=50, null=True, blank=True)
    # Stored and compared verbatim; see services.auth.
    password = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'donor'
        ordering = ['-donor_id']

    def __str__(self) -> str:
        return f"{self.donor_id} - {self.name}"


class Category(models.Model):
    category_id = models.CharField(max_length=32, primary_key=True)
    category_name = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)

    class Meta:
        db_table = 'category'
        ordering = ['category_id']
        verbose_name_plural = 'Categories'

    def __str__(self) -> str:
        return f"{self.category_id} - {self.category_name}"


class Program(models.Model):
    """Donation program.

    ``status`` and ``category`` are free-form columns: rows written by older
    tooling may hold either schema generation's vocabulary, so reads always go
    through ``normalize_program``.
    """

    class Status(models.TextChoices):
        PLANNED = 'planned', STATUS_LABELS['planned']
        RUNNING = 'running', STATUS_LABELS['running']
        FINISHED = 'finished', STATUS_LABELS['finished']

    program_id = models.CharField(max_length=32, primary_key=True)
    program_name = models.CharField(max_length=255)
    category = models.CharField(
        max_length=50,
        blank=True,
        default='others',
        choices=list(CATEGORY_LABELS.items()),
    )
    status = models.CharField(max_length=30, choices=Status.choices, default=Status.PLANNED, db_index=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True, db_index=True)
    total_amount = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    organization = models.CharField(max_length=255, blank=True, null=True)
    contact = models.CharField(max_length=100, blank=True, null=True)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='programs',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'program'
        ordering = ['end_date']

    def __str__(self) -> str:
        return f"{self.program_id} - {self.program_name}"
