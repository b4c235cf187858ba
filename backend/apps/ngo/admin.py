from django.contrib import admin
from .models import Category, Donor, Program


@admin.register(Donor)
class DonorAdmin(admin.ModelAdmin):
    list_display = ("donor_id", "name", "email", "phone", "created_at")
    search_fields = ("name", "email", "phone")
    exclude = ("password",)


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    list_display = ("program_id", "program_name", "category", "status", "start_date", "end_date", "company")
    list_filter = ("status", "category", "company")
    search_fields = ("program_id", "program_name")


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("category_id", "category_name", "description")
    search_fields = ("category_id", "category_name")
