from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("seq", models.BigAutoField(primary_key=True, serialize=False)),
                (
                    "entry_id",
                    models.CharField(
                        help_text="<batch_id>-<line item id>.",
                        max_length=128,
                        unique=True,
                    ),
                ),
                (
                    "batch_id",
                    models.CharField(
                        help_text="Shared by every line of one checkout.",
                        max_length=64,
                    ),
                ),
                (
                    "timestamp",
                    models.DateTimeField(help_text="When the sale was paid."),
                ),
                ("customer_id", models.CharField(max_length=128)),
                ("customer_name", models.CharField(max_length=255)),
                ("staff_id", models.CharField(max_length=128)),
                ("staff_name", models.CharField(max_length=255)),
                ("service_name", models.CharField(max_length=255)),
                ("category", models.CharField(max_length=64)),
                (
                    "gross_amount",
                    models.DecimalField(decimal_places=4, max_digits=14),
                ),
                (
                    "discount_amount",
                    models.DecimalField(decimal_places=4, max_digits=14),
                ),
                ("payment_method", models.CharField(max_length=32)),
            ],
            options={
                "db_table": "pos_ledger_entry",
                "ordering": ["seq"],
            },
        ),
        migrations.AddIndex(
            model_name="ledgerentry",
            index=models.Index(fields=["timestamp"], name="idx_ledger_timestamp"),
        ),
        migrations.AddIndex(
            model_name="ledgerentry",
            index=models.Index(fields=["batch_id"], name="idx_ledger_batch"),
        ),
    ]
