from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("companies", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Donor",
            fields=[
                ("donor_id", models.BigAutoField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=100)),
                ("email", models.EmailField(blank=True, max_length=255, null=True, unique=True)),
                ("phone", models.CharField(blank=True, max_length=50, null=True)),
                ("password", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={"db_table": "donor", "ordering": ["-donor_id"]},
        ),
        migrations.CreateModel(
            name="Category",
            fields=[
                ("category_id", models.CharField(max_length=32, primary_key=True, serialize=False)),
                ("category_name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, null=True)),
            ],
            options={"db_table": "category", "ordering": ["category_id"], "verbose_name_plural": "Categories"},
        ),
        migrations.CreateModel(
            name="Program",
            fields=[
                ("program_id", models.CharField(max_length=32, primary_key=True, serialize=False)),
                ("program_name", models.CharField(max_length=255)),
                ("category", models.CharField(blank=True, choices=[("children", "아동"), ("environment", "환경"), ("education", "교육"), ("animal", "동물"), ("health", "보건"), ("others", "기타")], default="others", max_length=50)),
                ("status", models.CharField(choices=[("planned", "계획"), ("running", "진행 중"), ("finished", "종료")], db_index=True, default="planned", max_length=30)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, db_index=True, null=True)),
                ("total_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ("location", models.CharField(blank=True, max_length=255, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("organization", models.CharField(blank=True, max_length=255, null=True)),
                ("contact", models.CharField(blank=True, max_length=100, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="programs", to="companies.company")),
            ],
            options={"db_table": "program", "ordering": ["end_date"]},
        ),
    ]
