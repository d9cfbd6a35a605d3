from django.contrib import admin

from .models import Booking, GuestLock, UnitLock


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'guest_name', 'unit_id',
        'check_in_date', 'check_out_date', 'number_of_nights', 'created_at'
    )
    list_filter = (
        'unit_id',
        'check_in_date',
        'created_at',
    )
    date_hierarchy = 'check_in_date'
    search_fields = ('guest_name', 'unit_id')
    readonly_fields = ('created_at', 'updated_at')
    ordering = ('-created_at',)


@admin.register(GuestLock)
class GuestLockAdmin(admin.ModelAdmin):
    list_display = ('id', 'guest_name')
    search_fields = ('guest_name',)


@admin.register(UnitLock)
class UnitLockAdmin(admin.ModelAdmin):
    list_display = ('id', 'unit_id')
    search_fields = ('unit_id',)
