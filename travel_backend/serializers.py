from rest_framework import serializers

from .models import PRICE_UNIT_CHOICES, Review


class CategorySerializer(serializers.Serializer):
    id = serializers.SlugField(max_length=50)
    name = serializers.CharField(max_length=100)
    icon = serializers.CharField(max_length=50)
    href = serializers.CharField(max_length=200)
    image_url = serializers.URLField(max_length=500)
    enabled = serializers.BooleanField(default=True)

    def validate_href(self, value):
        if not value.startswith("/"):
            raise serializers.ValidationError("Link must start with '/'.")
        return value


class SiteSettingsSerializer(serializers.Serializer):
    logo_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    whatsapp_number = serializers.CharField(max_length=30, required=False, allow_blank=True)
    booking_email_to = serializers.EmailField(required=False, allow_blank=True)
    resend_email_from = serializers.CharField(max_length=254, required=False, allow_blank=True)
    hero_background_image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    suggestions_background_image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    category_images = serializers.DictField(child=serializers.CharField(allow_blank=True), required=False)
    categories = CategorySerializer(many=True, required=False)

    def validate_categories(self, value):
        ids = [c["id"] for c in value]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError("Category ids must be unique.")
        return [dict(c) for c in value]


class MediaItemSerializer(serializers.Serializer):
    image_url = serializers.URLField(max_length=500)
    description = serializers.CharField(max_length=500)


class ServiceSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=100, required=False, allow_blank=True)
    category = serializers.SlugField(max_length=50)
    name = serializers.CharField(max_length=200)
    label = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    description = serializers.CharField()
    image_url = serializers.URLField(max_length=500)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    price_unit = serializers.ChoiceField(choices=[c[0] for c in PRICE_UNIT_CHOICES])
    location = serializers.CharField(max_length=200)
    details = serializers.DictField(child=serializers.CharField(allow_blank=True), required=False, default=dict)
    additional_media = MediaItemSerializer(many=True, required=False, default=list)
    is_active = serializers.BooleanField(default=True)
    is_best_offer = serializers.BooleanField(default=False)
    order = serializers.IntegerField(min_value=0, required=False, default=0)

    def validate_category(self, value):
        allowed = self.context.get("category_ids")
        if allowed is not None and value not in allowed:
            raise serializers.ValidationError(f"Unknown category '{value}'.")
        return value

    def validate_additional_media(self, value):
        return [dict(m) for m in value]


class ReviewSerializer(serializers.ModelSerializer):
    class Meta:
        model = Review
        fields = ["review_id", "service_id", "user_id", "author_name", "author_image", "rating", "comment", "created_at"]
        read_only_fields = ["review_id", "user_id", "created_at"]
        extra_kwargs = {
            "rating": {"min_value": 1, "max_value": 5},
        }


class ReservationRequestSerializer(serializers.Serializer):
    service_id = serializers.CharField(max_length=100)
    customer_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    customer_email = serializers.EmailField(required=False, allow_blank=True, default="")
    start_date = serializers.DateField(required=False, allow_null=True)
    end_date = serializers.DateField(required=False, allow_null=True)
    pickup_at = serializers.DateTimeField(required=False, allow_null=True)
    origin = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    destination = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")


class InquirySerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=150)
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default="")
    booking_method = serializers.ChoiceField(choices=["email", "whatsapp"], default="email")
    service_id = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    service_name = serializers.CharField(max_length=200)
    category = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    start_date = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    end_date = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    origin = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    destination = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    message = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        method = attrs.get("booking_method")
        if method == "email" and not attrs.get("email"):
            raise serializers.ValidationError({"email": "A valid email address is required."})
        if method == "whatsapp" and not attrs.get("phone"):
            raise serializers.ValidationError({"phone": "A phone number is required for WhatsApp."})
        return attrs


class EmailTemplateSerializer(serializers.Serializer):
    template = serializers.CharField()


class ManageAdminSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=["add", "remove", "promote"])
    email = serializers.EmailField(required=False)
    password = serializers.CharField(min_length=6, required=False, write_only=True)
    user_id = serializers.IntegerField(required=False)

    def validate(self, attrs):
        if attrs["action"] == "add":
            if not attrs.get("email") or not attrs.get("password"):
                raise serializers.ValidationError("Email and password (min 6 characters) are required.")
        elif not attrs.get("user_id") and not attrs.get("email"):
            raise serializers.ValidationError("user_id or email is required.")
        return attrs


class BootstrapSuperAdminSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)


class BookingBatchSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=["paid", "delete"])
    reservation_ids = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    inquiry_ids = serializers.ListField(child=serializers.CharField(), required=False, default=list)

    def validate(self, attrs):
        if not attrs["reservation_ids"] and not attrs["inquiry_ids"]:
            raise serializers.ValidationError("No bookings selected.")
        return attrs
