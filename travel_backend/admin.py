from django.contrib import admin
from .models import (
    Service, Reservation, Inquiry, Review,
    AdminAccount, SiteSettings, EmailTemplate,
)


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("service_id", "name", "category", "price", "price_unit", "is_active", "is_best_offer")
    list_filter = ("category", "is_active", "is_best_offer")
    search_fields = ("service_id", "name", "location")


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ("reservation_id", "service_name", "total_price", "payment_status", "created_at")
    list_filter = ("payment_status", "category")


@admin.register(Inquiry)
class InquiryAdmin(admin.ModelAdmin):
    list_display = ("inquiry_id", "customer_name", "service_name", "booking_method", "created_at")
    list_filter = ("booking_method",)


admin.site.register(Review)
admin.site.register(AdminAccount)
admin.site.register(SiteSettings)
admin.site.register(EmailTemplate)
