from django.core.management.base import BaseCommand
from django.db import transaction

from travel_backend.defaults import SEED_SERVICES
from travel_backend.models import Service
from travel_backend.utilities import generate_service_id


class Command(BaseCommand):
    help = "Write the bundled sample services (skips names that already exist in a category)."

    def add_arguments(self, parser):
        parser.add_argument("--replace", action="store_true",
                            help="Delete every existing service before seeding.")

    @transaction.atomic
    def handle(self, *args, **options):
        if options["replace"]:
            deleted, _ = Service.objects.all().delete()
            self.stdout.write(f"Deleted {deleted} existing services.")

        created = 0
        for order, item in enumerate(SEED_SERVICES):
            if Service.objects.filter(category=item["category"], name=item["name"]).exists():
                continue
            Service.objects.create(
                service_id=generate_service_id(item["name"], item["category"]),
                order=order,
                **item,
            )
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Seeded {created} services."))
