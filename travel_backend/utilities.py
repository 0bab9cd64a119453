# Standard Library
import re
import uuid

# Django
from django.utils.text import slugify

# Local Imports
from .models import Service

PLACEHOLDER_RE = re.compile(r"\{\{([^{}]+)\}\}")

CATEGORY_PREFIXES = {
    "cars": "CAR",
    "hotels": "HTL",
    "transport": "TRN",
    "explore": "EXP",
}


def render_template(template, data):
    """
    Fill every {{key}} in `template` from `data` in a single pass. The key is
    the literal text between the braces. Missing keys and falsy values
    render as "". Substituted text is not
    re-scanned, and nothing is HTML-escaped here.
    """
    if not template:
        return ""
    data = data or {}

    def _sub(match):
        value = data.get(match.group(1))
        return str(value) if value else ""

    return PLACEHOLDER_RE.sub(_sub, template)


def generate_service_id(name, category):
    prefix = CATEGORY_PREFIXES.get(category) or (category[:3].upper() if category else "SRV")

    # First letters of the first two words only
    words = re.findall(r'\b\w+', name or "")
    first_letters = ''.join(word[0].upper() for word in words[:2]) or "X"

    base = f"{prefix}-{first_letters}"

    existing_ids = Service.objects.filter(service_id__startswith=base).values_list('service_id', flat=True)

    numbers = []
    for sid in existing_ids:
        match = re.search(r'(\d{3})$', sid)
        if match:
            numbers.append(int(match.group(1)))

    next_num = max(numbers) + 1 if numbers else 1
    if next_num > 999:
        raise ValueError("Exceeded maximum 3-digit unique number for this base ID")

    return f"{base}-{next_num:03d}"


def generate_reservation_id():
    return f"RSV-{uuid.uuid4().hex[:10].upper()}"


def generate_inquiry_id():
    return f"INQ-{uuid.uuid4().hex[:10].upper()}"


def generate_review_id():
    return f"REV-{uuid.uuid4().hex[:8].upper()}"


def generate_copy_id(service_id):
    # unique before the copy is saved
    return f"{service_id}-C{uuid.uuid4().hex[:6].upper()}"


def generate_category_slug(name, taken):
    """
    Slug for a (possibly duplicated) category that does not collide with `taken`.
    """
    base = slugify(name) or "category"
    slug = base
    counter = 1
    while slug in taken:
        slug = f"{base}-{counter}"
        counter += 1
    return slug


def _as_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def serialize_service(service):
    return {
        "id": service.service_id,
        "category": service.category,
        "name": service.name,
        "label": service.label,
        "description": service.description,
        "price": float(service.price),
        "price_unit": service.price_unit,
        "location": service.location,
        "details": service.details or {},
        "image_url": service.image_url,
        "additional_media": service.additional_media or [],
        "is_active": service.is_active,
        "is_best_offer": service.is_best_offer,
        "order": service.order,
        "created_at": service.created_at,
        "updated_at": service.updated_at,
    }
