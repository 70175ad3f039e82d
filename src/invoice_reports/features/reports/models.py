from tortoise import fields, models


class Report(models.Model):
    """A single invoice line item.

    Rows are written by the billing side and only read here. Several rows
    share an ``invoice_number`` when they belong to the same transaction;
    that grouping is worked out at query time.
    """

    id = fields.IntField(primary_key=True)
    invoice_number = fields.IntField(db_index=True)
    payment_method = fields.CharField(max_length=50)
    gst = fields.FloatField(default=0)
    spl = fields.FloatField(default=0)
    name = fields.CharField(max_length=255)
    date = fields.CharField(max_length=10, db_index=True, description="Stored as text, see REPORT_DATE_FORMAT")

    def __str__(self):
        return f"Report {self.id} - invoice {self.invoice_number}: {self.name} ({self.date})"

    class Meta:
        table = "reports"
