"""
Management command to create sample data for trying the API.

Usage:
    python manage.py create_sample_data

This creates:
- 3 users (Alice, Bob, Carol)
- 1 circle (Tennis) with all of them as members
- 1 confirmed event (Dinner, 10000 split three ways)
- Bob's payment report, waiting for Alice's approval
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.services import register_user
from apps.circles.models import Circle
from apps.circles.services import create_circle, join_circle, is_member
from apps.events.models import Event
from apps.events.services import create_event, report_payment


SAMPLE_USERS = [
    ('U-sample-alice', 'Alice'),
    ('U-sample-bob', 'Bob'),
    ('U-sample-carol', 'Carol'),
]


class Command(BaseCommand):
    help = 'Create sample data for trying the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Remove sample events and circles before creating new ones',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing sample data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = [register_user(user_id=uid, display_name=name) for uid, name in SAMPLE_USERS]
        alice, bob, carol = users

        circle = self.create_circle(alice, [bob, carol])

        event = create_event(
            circle_id=circle.id,
            creator_id=alice.id,
            name='Dinner',
            total_amount=10000,
            participant_ids=[u.id for u in users],
        )
        report_payment(event_id=event.id, user_id=bob.id)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write(f'Circle: {circle.name} (id={circle.id})')
        self.stdout.write(f'Event: {event.name} (id={event.id}, split={event.split_amount})')
        self.stdout.write('Users:')
        for user in users:
            self.stdout.write(f'  {user.id} ({user.display_name})')

    def create_circle(self, creator, members):
        """Reuse the sample circle if it already exists."""
        circle = Circle.objects.filter(name='Tennis', created_by=creator).first()
        if circle is None:
            circle = create_circle(creator_id=creator.id, name='Tennis')

        for member in members:
            if not is_member(user_id=member.id, circle_id=circle.id):
                join_circle(user_id=member.id, circle_id=circle.id)
        return circle

    def clear_data(self):
        """Remove events and circles created by the sample users."""
        sample_ids = [uid for uid, _ in SAMPLE_USERS]
        Event.objects.filter(organizer_id__in=sample_ids).delete()
        Circle.objects.filter(created_by_id__in=sample_ids).delete()
