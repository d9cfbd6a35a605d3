from django.db import models
from django.db.models import F, Q


class Booking(models.Model):
    """A guest's stay in a unit over [check_in_date, check_out_date)."""
    guest_name = models.CharField(max_length=255)
    unit_id = models.CharField(max_length=64)
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    number_of_nights = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']
        indexes = [
            models.Index(
                fields=['unit_id', 'check_in_date', 'check_out_date'],
                name='booking_unit_dates_idx',
            ),
            models.Index(fields=['guest_name', 'unit_id'], name='booking_guest_unit_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(check_out_date__gt=F('check_in_date')),
                name='booking_checkout_after_checkin',
            ),
            models.CheckConstraint(
                condition=Q(number_of_nights__gte=1),
                name='booking_nights_positive',
            ),
        ]

    def __str__(self):
        return f"{self.guest_name} → unit {self.unit_id} [{self.check_in_date}..{self.check_out_date})"
