from django.contrib import admin
from .models import Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ('company_id', 'company_name', 'contact', 'address')
    search_fields = ('company_name', 'contact', 'address')
