from django.db import models


class Company(models.Model):
    """
    Organization that runs donation programs.

    The programs themselves are owned by ``ngo.Program`` through its
    ``company`` foreign key; a company's program list is always derived.
    """
    company_id = models.BigAutoField(primary_key=True)
    company_name = models.CharField(max_length=255)
    contact = models.CharField(max_length=100, blank=True)
    address = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = 'company'
        ordering = ['company_id']
        verbose_name_plural = 'Companies'

    def __str__(self):
        return self.company_name
