from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Company",
            fields=[
                ("company_id", models.BigAutoField(primary_key=True, serialize=False)),
                ("company_name", models.CharField(max_length=255)),
                ("contact", models.CharField(blank=True, max_length=100)),
                ("address", models.CharField(blank=True, max_length=255)),
            ],
            options={
                "db_table": "company",
                "ordering": ["company_id"],
                "verbose_name_plural": "Companies",
            },
        ),
    ]
