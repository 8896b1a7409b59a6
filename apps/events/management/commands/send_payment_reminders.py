"""
Management command to remind participants of unpaid events.

Meant to run once a day from an external scheduler (cron).

Usage:
    python manage.py send_payment_reminders
    python manage.py send_payment_reminders --dry-run
"""

from django.core.management.base import BaseCommand
from apps.events.services.reminders import send_payment_reminders, unpaid_participants


class Command(BaseCommand):
    help = 'Send payment reminders to participants who have not reported'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List who would be reminded without sending anything',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        participants = list(unpaid_participants())

        if not participants:
            self.stdout.write(
                self.style.SUCCESS('No unpaid participants. Nothing to send.')
            )
            return

        self.stdout.write(f'\nFound {len(participants)} unpaid participant(s):\n')

        for participant in participants:
            self.stdout.write(
                f'  - {participant.user_id} | {participant.event.name} | {participant.event.split_amount}'
            )

        if dry_run:
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No reminders sent.')
            )
            return

        sent = send_payment_reminders()

        self.stdout.write(
            self.style.SUCCESS(f'\nSent {sent} reminder(s).')
        )
