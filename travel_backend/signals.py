import logging

from django.contrib.auth.signals import user_logged_in
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import AdminAccount, Inquiry, Reservation, Service, SiteSettings

logger = logging.getLogger("travel_backend.activity")


# ==== SIGNALS ====
@receiver(post_save, sender=Inquiry)
def log_inquiry_received(sender, instance, created, **kwargs):
    if created:
        logger.info(
            "Inquiry %s received for '%s' via %s from %s",
            instance.inquiry_id, instance.service_name, instance.booking_method, instance.customer_name,
        )


@receiver(post_save, sender=Reservation)
def log_reservation_created_or_paid(sender, instance, created, **kwargs):
    if created:
        logger.info(
            "Reservation %s created for '%s' (total %s, user %s)",
            instance.reservation_id, instance.service_name, instance.total_price, instance.user_id,
        )
    elif instance.payment_status == "completed":
        logger.info("Reservation %s payment completed.", instance.reservation_id)


@receiver(post_save, sender=Service)
def log_service_created_or_updated(sender, instance, created, **kwargs):
    action = "created" if created else "updated"
    logger.info("Service '%s' (%s) was %s.", instance.name, instance.service_id, action)


@receiver(post_delete, sender=Service)
def log_service_deleted(sender, instance, **kwargs):
    logger.info("Service '%s' (%s) was deleted.", instance.name, instance.service_id)


@receiver(post_save, sender=AdminAccount)
def log_admin_created_or_updated(sender, instance, created, **kwargs):
    action = "created" if created else f"updated (role={instance.role})"
    logger.info("Admin '%s' was %s.", instance.email, action)


@receiver(post_delete, sender=AdminAccount)
def log_admin_removed(sender, instance, **kwargs):
    logger.info("Admin '%s' was removed.", instance.email)


@receiver(post_save, sender=SiteSettings)
def log_site_settings_updated(sender, instance, **kwargs):
    logger.info("Site settings were updated.")


@receiver(user_logged_in)
def log_login(sender, request, user, **kwargs):
    logger.info("%s just logged in.", user.get_username())
