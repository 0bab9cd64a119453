from decimal import Decimal

from django.db import models
from django.conf import settings  # for AUTH_USER_MODEL-safe FKs
from django.core.validators import MinValueValidator, MaxValueValidator


PRICE_UNIT_CHOICES = [
    ("day", "Per Day"),
    ("night", "Per Night"),
    ("trip", "Per Trip"),
]


class Service(models.Model):
    service_id = models.CharField(primary_key=True, max_length=100)
    category = models.CharField(max_length=50, db_index=True)
    name = models.CharField(max_length=200, db_index=True)
    label = models.CharField(max_length=100, blank=True, default="")
    description = models.TextField()
    price = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    price_unit = models.CharField(max_length=10, choices=PRICE_UNIT_CHOICES, default="day")
    location = models.CharField(max_length=200, blank=True, default="", db_index=True)
    details = models.JSONField(default=dict, blank=True)  # {"Seats": "4", "Transmission": "Automatic"}
    image_url = models.URLField(max_length=500, blank=True, default="")
    additional_media = models.JSONField(default=list, blank=True)  # [{"image_url": ..., "description": ...}]
    is_active = models.BooleanField(default=True, db_index=True)
    is_best_offer = models.BooleanField(default=False, db_index=True)
    order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["category", "order", "name"]

    def __str__(self):
        return f"{self.name} ({self.category})"


class Reservation(models.Model):
    PAYMENT_STATUS_CHOICES = [
        ("pending", "Pending"),
        ("completed", "Completed"),
    ]

    reservation_id = models.CharField(primary_key=True, max_length=100)
    service_id = models.CharField(max_length=100, db_index=True)
    service_name = models.CharField(max_length=200)
    category = models.CharField(max_length=50, db_index=True)
    customer_name = models.CharField(max_length=150, blank=True, default="")
    customer_email = models.EmailField(blank=True, default="")
    total_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    price_unit = models.CharField(max_length=10, choices=PRICE_UNIT_CHOICES, default="day")
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    pickup_at = models.DateTimeField(null=True, blank=True)
    origin = models.CharField(max_length=200, blank=True, default="")
    destination = models.CharField(max_length=200, blank=True, default="")
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default="pending", db_index=True)
    user_id = models.CharField(max_length=100, default="anonymous", db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.reservation_id} - {self.service_name} ({self.payment_status})"


class Inquiry(models.Model):
    BOOKING_METHOD_CHOICES = [
        ("email", "Email"),
        ("whatsapp", "WhatsApp"),
    ]

    inquiry_id = models.CharField(primary_key=True, max_length=100)
    customer_name = models.CharField(max_length=150)
    customer_email = models.EmailField(blank=True, default="")
    customer_phone = models.CharField(max_length=30, blank=True, default="")
    service_id = models.CharField(max_length=100, blank=True, default="", db_index=True)
    service_name = models.CharField(max_length=200)
    category = models.CharField(max_length=50, blank=True, default="")
    booking_method = models.CharField(max_length=20, choices=BOOKING_METHOD_CHOICES, default="email")
    total_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    start_date = models.CharField(max_length=50, blank=True, default="")
    end_date = models.CharField(max_length=50, blank=True, default="")
    origin = models.CharField(max_length=200, blank=True, default="")
    destination = models.CharField(max_length=200, blank=True, default="")
    message = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "inquiries"

    def __str__(self):
        return f"{self.customer_name} - {self.service_name}"


class Review(models.Model):
    review_id = models.CharField(primary_key=True, max_length=100)
    service_id = models.CharField(max_length=100, blank=True, default="", db_index=True)
    user_id = models.CharField(max_length=100, blank=True, default="")
    author_name = models.CharField(max_length=150)
    author_image = models.URLField(max_length=500, blank=True, default="")
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.author_name} ({self.rating}/5)"


class AdminAccount(models.Model):
    ROLE_CHOICES = [
        ("admin", "Admin"),
        ("superadmin", "Super Admin"),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="admin_account")
    email = models.EmailField(unique=True, db_index=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="admin")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]

    @property
    def is_superadmin(self):
        return self.role == "superadmin"

    def __str__(self):
        return f"{self.email} ({self.role})"


class SiteSettings(models.Model):
    """
    Singleton override document. Empty values mean "use the bundled default".
    """
    singleton_lock = models.CharField(max_length=1, unique=True, default="X", editable=False)
    logo_url = models.URLField(max_length=500, blank=True, default="")
    whatsapp_number = models.CharField(max_length=30, blank=True, default="")
    booking_email_to = models.CharField(max_length=254, blank=True, default="")
    resend_email_from = models.CharField(max_length=254, blank=True, default="")
    hero_background_image_url = models.URLField(max_length=500, blank=True, default="")
    suggestions_background_image_url = models.URLField(max_length=500, blank=True, default="")
    category_images = models.JSONField(default=dict, blank=True)
    categories = models.JSONField(default=list, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "site settings"

    def __str__(self):
        return "Site Settings"


class EmailTemplate(models.Model):
    KIND_CHOICES = [
        ("admin", "Admin Notification"),
        ("client", "Client Confirmation"),
    ]

    kind = models.CharField(max_length=20, choices=KIND_CHOICES, unique=True)
    template = models.TextField()
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.get_kind_display()
