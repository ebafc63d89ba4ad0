import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Enterprise",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, verbose_name="name")),
                ("permalink", models.SlugField(max_length=255, unique=True, verbose_name="permalink")),
                (
                    "sells",
                    models.CharField(
                        choices=[
                            ("none", "Does not sell"),
                            ("own", "Sells own produce"),
                            ("any", "Sells any produce"),
                        ],
                        default="none",
                        max_length=10,
                        verbose_name="sells",
                    ),
                ),
                ("is_primary_producer", models.BooleanField(default=False, verbose_name="primary producer")),
                ("description", models.TextField(blank=True, verbose_name="description")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="owned_enterprises",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="owner",
                    ),
                ),
            ],
            options={
                "verbose_name": "enterprise",
                "verbose_name_plural": "enterprises",
                "ordering": ["name"],
            },
        ),
    ]
