# --- Reservations (checkout) + Inquiries (email / WhatsApp) -------------------
# Standard Library
import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

# Django
from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone
from django.utils.html import escape

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .catalog import get_transport_price
from .email_templates import get_email_template
from .mailer import MailerError, get_mailer
from .models import Inquiry, Reservation, Service
from .permissions import FrontendOnlyPermission, IsAdminAccount
from .serializers import BookingBatchSerializer, InquirySerializer, ReservationRequestSerializer
from .site_settings import load_effective_settings
from .utilities import generate_inquiry_id, generate_reservation_id, render_template

logger = logging.getLogger(__name__)

PRICE_BEARING_CATEGORIES = ("cars", "hotels")
EMAIL_NOT_CONFIGURED_WARNING = "Your inquiry was received, but email notifications are not configured."
EMAIL_FAILED_WARNING = "Your inquiry was received, but some notification emails could not be sent."


def compute_total(price, price_unit, start_date, end_date):
    """
    Total for a date range, or None when the range is missing or not forward.
    night -> one charge per night (day difference); day -> inclusive day count.
    """
    if not start_date or not end_date:
        return None
    diff = (end_date - start_date).days
    if diff <= 0:
        return None
    count = diff if price_unit == "night" else diff + 1
    return Decimal(str(price)) * count


def _serialize_reservation(r: Reservation):
    return {
        "id": r.reservation_id,
        "type": "reservation",
        "service_id": r.service_id,
        "service_name": r.service_name,
        "category": r.category,
        "customer_name": r.customer_name,
        "customer_email": r.customer_email,
        "total_price": float(r.total_price),
        "price_unit": r.price_unit,
        "start_date": r.start_date.isoformat() if r.start_date else "",
        "end_date": r.end_date.isoformat() if r.end_date else "",
        "pickup_at": r.pickup_at.isoformat() if r.pickup_at else "",
        "origin": r.origin,
        "destination": r.destination,
        "payment_status": r.payment_status,
        "user_id": r.user_id,
        "created_at": r.created_at.isoformat() if r.created_at else "",
        "paid_at": r.paid_at.isoformat() if r.paid_at else "",
    }


def _serialize_inquiry(i: Inquiry):
    return {
        "id": i.inquiry_id,
        "type": "inquiry",
        "service_id": i.service_id,
        "service_name": i.service_name,
        "category": i.category,
        "customer_name": i.customer_name,
        "customer_email": i.customer_email,
        "customer_phone": i.customer_phone,
        "booking_method": i.booking_method,
        "total_price": float(i.total_price) if i.total_price is not None else None,
        "start_date": i.start_date,
        "end_date": i.end_date,
        "origin": i.origin,
        "destination": i.destination,
        "message": i.message,
        "created_at": i.created_at.isoformat() if i.created_at else "",
    }


class CreateReservationAPIView(APIView):
    """
    POST /api/reservations
    cars/hotels: {service_id, start_date, end_date}
    transport:   {service_id, pickup_at, origin?, destination?}
    """
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        serializer = ReservationRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Invalid reservation", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data

        service = Service.objects.filter(service_id=data["service_id"], is_active=True).first()
        if not service:
            return Response({"error": "Service not found"}, status=status.HTTP_404_NOT_FOUND)

        start_date = data.get("start_date")
        end_date = data.get("end_date")
        pickup_at = data.get("pickup_at")
        origin = data.get("origin", "")
        destination = data.get("destination", "")

        if service.category in PRICE_BEARING_CATEGORIES:
            total = compute_total(service.price, service.price_unit, start_date, end_date)
            if not total or total <= 0:
                return Response({"error": "Please select a valid start and end date."},
                                status=status.HTTP_400_BAD_REQUEST)
        elif service.category == "transport":
            if not pickup_at:
                return Response({"error": "Please select a pickup date and time."},
                                status=status.HTTP_400_BAD_REQUEST)
            route_price = get_transport_price(origin, destination)
            total = Decimal(route_price) if route_price is not None else service.price
            start_date = end_date = None
        else:
            total = service.price

        user = request.user
        user_id = str(user.pk) if user and user.is_authenticated else "anonymous"

        try:
            reservation = Reservation.objects.create(
                reservation_id=generate_reservation_id(),
                service_id=service.service_id,
                service_name=service.name,
                category=service.category,
                customer_name=data.get("customer_name", ""),
                customer_email=data.get("customer_email", ""),
                total_price=total,
                price_unit=service.price_unit,
                start_date=start_date,
                end_date=end_date,
                pickup_at=pickup_at,
                origin=origin,
                destination=destination,
                payment_status="pending",
                user_id=user_id,
            )
        except DatabaseError as e:
            logger.exception("Creating reservation for %s failed", service.service_id)
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({
            "success": True,
            "reservation_id": reservation.reservation_id,
            "checkout_url": f"/checkout/{reservation.reservation_id}",
            "reservation": _serialize_reservation(reservation),
        }, status=status.HTTP_201_CREATED)


class ShowReservationAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, reservation_id):
        reservation = Reservation.objects.filter(reservation_id=reservation_id).first()
        if not reservation:
            return Response({"error": "Reservation not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(_serialize_reservation(reservation), status=status.HTTP_200_OK)


class ConfirmPaymentAPIView(APIView):
    """
    Simulated payment. pending -> completed is the only transition; a repeat
    call on a completed reservation is a no-op success.
    """
    permission_classes = [FrontendOnlyPermission]

    def post(self, request, reservation_id):
        try:
            with transaction.atomic():
                reservation = (
                    Reservation.objects.select_for_update()
                    .filter(reservation_id=reservation_id)
                    .first()
                )
                if not reservation:
                    return Response({"error": "Reservation not found"}, status=status.HTTP_404_NOT_FOUND)

                if reservation.payment_status != "completed":
                    reservation.payment_status = "completed"
                    reservation.paid_at = timezone.now()
                    reservation.save(update_fields=["payment_status", "paid_at"])
        except DatabaseError as e:
            logger.exception("Confirming payment for %s failed", reservation_id)
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, "reservation": _serialize_reservation(reservation)},
                        status=status.HTTP_200_OK)


class CheckoutConfigAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        key = settings.STRIPE_PUBLISHABLE_KEY
        return Response({"payment_enabled": bool(key), "publishable_key": key}, status=status.HTTP_200_OK)


# ---- Inquiry notifications ----

def build_details_list(data):
    """
    <ul> of whichever optional fields are present, values HTML-escaped.
    """
    items = []
    if data.get("phone"):
        items.append(("Phone", data["phone"]))
    if data.get("start_date") and data.get("end_date"):
        items.append(("Dates", f"{data['start_date']} - {data['end_date']}"))
    elif data.get("start_date"):
        items.append(("Date", data["start_date"]))
    if data.get("origin"):
        items.append(("From", data["origin"]))
    if data.get("destination"):
        items.append(("To", data["destination"]))
    if data.get("price") is not None:
        items.append(("Estimated Price", f"{data['price']}"))
    if data.get("message"):
        items.append(("Message", data["message"]))

    if not items:
        return ""
    rows = "".join(f"<li><strong>{label}:</strong> {escape(value)}</li>" for label, value in items)
    return f"<ul>{rows}</ul>"


def _template_fields(data):
    return {
        "serviceName": escape(data.get("service_name", "")),
        "name": escape(data.get("name", "")),
        "email": escape(data.get("email", "")),
        "phone": escape(data.get("phone", "")),
        "bookingMethod": escape(data.get("booking_method", "")),
        "details": build_details_list(data),
    }


def send_inquiry_notifications(data, site_settings=None):
    """
    Admin notification (always attempted) and customer confirmation (only
    with an email address), sent concurrently. Every send is awaited
    whatever the others do. Returns a warning string or None.
    """
    site_settings = site_settings or load_effective_settings()
    mailer = get_mailer()

    recipient = site_settings.get("booking_email_to") or settings.BOOKING_EMAIL_TO
    sender = site_settings.get("resend_email_from") or settings.RESEND_EMAIL_FROM

    if not mailer.is_configured or not recipient or not sender:
        logger.warning("Inquiry emails skipped: mail provider or addresses not configured.")
        return EMAIL_NOT_CONFIGURED_WARNING

    fields = _template_fields(data)
    service_name = data.get("service_name", "")

    jobs = [(
        "admin",
        recipient,
        f"New Booking Inquiry for {service_name}",
        render_template(get_email_template("admin"), fields),
    )]
    if data.get("email"):
        jobs.append((
            "client",
            data["email"],
            f"Confirmation for {service_name}",
            render_template(get_email_template("client"), fields),
        ))

    failed = []
    with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
        futures = [(kind, pool.submit(mailer.send, to, subject, html, sender))
                   for kind, to, subject, html in jobs]
        for kind, future in futures:
            try:
                future.result()
            except MailerError as e:
                logger.warning("Inquiry %s email failed: %s", kind, e)
                failed.append(kind)
            except Exception:
                logger.exception("Inquiry %s email failed unexpectedly", kind)
                failed.append(kind)

    return EMAIL_FAILED_WARNING if failed else None


class SubmitInquiryAPIView(APIView):
    """
    POST /api/inquiries
    Accepts JSON: name, email?, phone?, booking_method (email|whatsapp),
    service_id?, service_name, category?, price?, start_date?, end_date?,
    origin?, destination?, message?
    The record is written before any email goes out; email problems only
    produce a `warning`.
    """
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        serializer = InquirySerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"success": False, "error": "Invalid data.", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data

        try:
            inquiry = Inquiry.objects.create(
                inquiry_id=generate_inquiry_id(),
                customer_name=data["name"],
                customer_email=data.get("email", ""),
                customer_phone=data.get("phone", ""),
                service_id=data.get("service_id", ""),
                service_name=data["service_name"],
                category=data.get("category", ""),
                booking_method=data["booking_method"],
                total_price=data.get("price"),
                start_date=data.get("start_date", ""),
                end_date=data.get("end_date", ""),
                origin=data.get("origin", ""),
                destination=data.get("destination", ""),
                message=data.get("message", ""),
            )
        except DatabaseError as e:
            logger.exception("Saving inquiry failed")
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        warning = send_inquiry_notifications(data)

        return Response({
            "success": True,
            "inquiry_id": inquiry.inquiry_id,
            "warning": warning,
        }, status=status.HTTP_201_CREATED)


# ---- Admin booking management ----

class ShowBookingsAPIView(APIView):
    """
    Reservations and inquiries in one list, newest first.
    """
    permission_classes = [IsAdminAccount]

    def get(self, request):
        kind = request.query_params.get("type", "all")
        rows = []
        if kind in ("all", "reservation"):
            rows.extend(_serialize_reservation(r) for r in Reservation.objects.all())
        if kind in ("all", "inquiry"):
            rows.extend(_serialize_inquiry(i) for i in Inquiry.objects.all())
        rows.sort(key=lambda r: r["created_at"], reverse=True)
        return Response({"bookings": rows, "count": len(rows)}, status=status.HTTP_200_OK)


class UpdateBookingsAPIView(APIView):
    """
    Batch actions:
      {"action": "paid",   "reservation_ids": [...]}
      {"action": "delete", "reservation_ids": [...], "inquiry_ids": [...]}
    """
    permission_classes = [IsAdminAccount]

    def post(self, request):
        serializer = BookingBatchSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Invalid batch action", "details": serializer.errors},
                            status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data

        try:
            with transaction.atomic():
                if data["action"] == "paid":
                    pending = Reservation.objects.filter(
                        reservation_id__in=data["reservation_ids"], payment_status="pending"
                    )
                    updated = 0
                    for r in pending:
                        r.payment_status = "completed"
                        r.paid_at = timezone.now()
                        r.save(update_fields=["payment_status", "paid_at"])
                        updated += 1
                    result = {"updated": updated}
                else:
                    deleted_r, _ = Reservation.objects.filter(reservation_id__in=data["reservation_ids"]).delete()
                    deleted_i, _ = Inquiry.objects.filter(inquiry_id__in=data["inquiry_ids"]).delete()
                    result = {"deleted": deleted_r + deleted_i}
        except DatabaseError as e:
            logger.exception("Batch booking action '%s' failed", data["action"])
            return Response({"success": False, "error": str(e)},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({"success": True, **result}, status=status.HTTP_200_OK)
