from django.db import models


class GuestLock(models.Model):
    """Row locked with SELECT ... FOR UPDATE while a guest books a unit."""
    guest_name = models.CharField(max_length=255, unique=True)

    def __str__(self):
        return f"lock:{self.guest_name}"
