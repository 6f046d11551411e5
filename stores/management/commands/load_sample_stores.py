import json

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management import BaseCommand, CommandError
from django.db import transaction

from stores.models import Store


class Command(BaseCommand):
    help = 'Loads stores from a JSON file, authored by the given user'

    def add_arguments(self, parser):
        parser.add_argument('path', type=str)
        parser.add_argument('--author', type=str, required=True,
                            help='Username of the author of the stores')
        parser.add_argument('--delete', action='store_true',
                            help='Remove every existing store first')

    def handle(self, *args, **options):
        try:
            author = get_user_model().objects.get_by_natural_key(
                options['author'])
        except get_user_model().DoesNotExist:
            raise CommandError('Unknown author: {}'.format(options['author']))

        with open(options['path']) as f:
            stores_data = json.load(f)

        with transaction.atomic():
            if options['delete']:
                deleted, _ = Store.objects.all().delete()
                self.stdout.write('Deleted {} records'.format(deleted))

            for store_data in stores_data:
                try:
                    store = Store(
                        name=store_data.get('name'),
                        description=store_data.get('description', ''),
                        tags=store_data.get('tags', []),
                        photo=store_data.get('photo', ''),
                        location=store_data.get('location', {}),
                        author=author
                    )
                    store.save()
                except ValidationError as err:
                    raise CommandError('Invalid store {}: {}'.format(
                        store_data.get('name'), err.message_dict))

                self.stdout.write('Loaded {}'.format(store.slug))
