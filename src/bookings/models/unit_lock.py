from django.db import models


class UnitLock(models.Model):
    """Row locked with SELECT ... FOR UPDATE while a unit's bookings change."""
    unit_id = models.CharField(max_length=64, unique=True)

    def __str__(self):
        return f"lock:{self.unit_id}"
