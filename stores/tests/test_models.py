from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.test import TestCase, override_settings

from stores.models import Store, Review


def create_store(author, name='Cafe Blue', **kwargs):
    data = {
        'name': name,
        'longitude': -79.3832,
        'latitude': 43.6532,
        'address': '1 King St W, Toronto',
        'author': author,
    }
    data.update(kwargs)

    store = Store(**data)
    store.save()
    return store


class StoreValidationTestCase(TestCase):
    def setUp(self):
        self.author = get_user_model().objects.create_user(
            'wes', 'wes@example.com', 'password')

    def assertRejected(self, field, **kwargs):
        kwargs.setdefault('author', self.author)

        with self.assertRaises(ValidationError) as context:
            create_store(**kwargs)

        self.assertIn(field, context.exception.message_dict)
        self.assertEqual(0, Store.objects.count())

    def test_requires_name(self):
        self.assertRejected('name', name=None)
        self.assertRejected('name', name='   ')

    def test_requires_coordinates(self):
        self.assertRejected('longitude', longitude=None)
        self.assertRejected('latitude', latitude=None)

    def test_malformed_coordinates_are_rejected(self):
        for coordinates in ([], [1.0], [1.0, 2.0, 3.0], None):
            store = Store(name='Cafe Blue', author=self.author, location={
                'coordinates': coordinates,
                'address': '1 King St W, Toronto'
            })

            with self.assertRaises(ValidationError) as context:
                store.save()

            self.assertEqual(['You must supply coordinates!'],
                             context.exception.message_dict['longitude'])
        self.assertEqual(0, Store.objects.count())

    def test_requires_address(self):
        self.assertRejected('address', address='')

    def test_requires_author(self):
        self.assertRejected('author', author=None)

    def test_tags_must_be_strings(self):
        self.assertRejected('tags', tags=['wifi', 3])

    def test_optional_fields_and_trimming(self):
        store = create_store(self.author, name='  Cafe Blue ',
                             description='  Good coffee  ')

        self.assertEqual('Cafe Blue', store.name)
        self.assertEqual('Good coffee', store.description)
        self.assertEqual([], store.tags)
        self.assertEqual({
            'type': 'Point',
            'coordinates': [-79.3832, 43.6532],
            'address': '1 King St W, Toronto',
        }, store.location)

    def test_location_setter(self):
        store = Store(name='Cafe Blue', author=self.author, location={
            'coordinates': [2.35, 48.85],
            'address': 'Paris'
        })
        store.save()

        self.assertEqual(2.35, store.longitude)
        self.assertEqual(48.85, store.latitude)
        self.assertEqual('Point', store.location_type)


class StoreSlugTestCase(TestCase):
    def setUp(self):
        self.author = get_user_model().objects.create_user(
            'wes', 'wes@example.com', 'password')

    def test_slug_from_name(self):
        store = create_store(self.author, name='Café Blue')
        self.assertEqual('cafe-blue', store.slug)

    def test_colliding_names_get_suffixes(self):
        slugs = [create_store(self.author).slug for _ in range(3)]
        self.assertEqual(['cafe-blue', 'cafe-blue-2', 'cafe-blue-3'], slugs)

    def test_similar_slugs_are_not_collisions(self):
        create_store(self.author, name='Cafe Blue Bar')
        store = create_store(self.author, name='Cafe Blue')

        self.assertEqual('cafe-blue', store.slug)

    def test_slug_kept_when_name_unchanged(self):
        create_store(self.author)
        store = create_store(self.author)

        store = Store.objects.get(pk=store.pk)
        store.description = 'Now with pastries'
        store.save()

        self.assertEqual('cafe-blue-2', Store.objects.get(pk=store.pk).slug)

    def test_slug_kept_when_renamed_to_same_base(self):
        store = create_store(self.author)

        store.name = 'CAFE blue'
        store.save()

        self.assertEqual('cafe-blue', store.slug)

    def test_slug_updated_on_rename(self):
        store = create_store(self.author)

        store = Store.objects.get(pk=store.pk)
        store.name = 'Green Tea'
        store.save()

        self.assertEqual('green-tea', Store.objects.get(pk=store.pk).slug)

    def test_taken_slug_is_retried(self):
        create_store(self.author)
        second = create_store(self.author)
        create_store(self.author)
        second.delete()

        # Two matches remain, so the first attempt is "cafe-blue-3"
        store = create_store(self.author)

        self.assertEqual('cafe-blue-4', store.slug)

    @override_settings(STORE_SLUG_MAX_RETRIES=0)
    def test_taken_slug_without_retries(self):
        create_store(self.author)
        second = create_store(self.author)
        create_store(self.author)
        second.delete()

        with self.assertRaises(IntegrityError):
            create_store(self.author)

    def test_reserved_and_empty_slugs(self):
        self.assertEqual('top-2', create_store(self.author, name='Top').slug)
        self.assertEqual('store', create_store(self.author, name='!!!').slug)


class StoreQuerySetTestCase(TestCase):
    def setUp(self):
        user_model = get_user_model()
        self.author = user_model.objects.create_user(
            'wes', 'wes@example.com', 'password')
        self.reviewer = user_model.objects.create_user(
            'scott', 'scott@example.com', 'password')

    def review(self, store, *ratings):
        for rating in ratings:
            Review.objects.create(store=store, author=self.reviewer,
                                  text='Nice', rating=rating)

    def test_tags_list(self):
        create_store(self.author, name='One', tags=['a', 'b'])
        create_store(self.author, name='Two', tags=['a'])
        create_store(self.author, name='Three', tags=['c'])

        tags = Store.objects.get_tags_list()

        self.assertEqual({'tag': 'a', 'count': 2}, tags[0])
        self.assertCountEqual([{'tag': 'b', 'count': 1},
                               {'tag': 'c', 'count': 1}], tags[1:])

    def test_empty_collection(self):
        self.assertEqual([], Store.objects.get_tags_list())
        self.assertEqual([], Store.objects.get_top_stores())

    def test_filter_by_tag(self):
        wifi = create_store(self.author, name='One', tags=['wifi', 'family'])
        create_store(self.author, name='Two', tags=['family'])

        self.assertEqual([wifi], list(Store.objects.filter_by_tag('wifi')))
        self.assertEqual(2, Store.objects.filter_by_tag('family').count())
        self.assertEqual(0, Store.objects.filter_by_tag('vegan').count())

    def test_top_stores(self):
        single = create_store(self.author, name='Single')
        pair = create_store(self.author, name='Pair')
        best = create_store(self.author, name='Best')
        self.review(single, 5)
        self.review(pair, 3, 5)
        self.review(best, 5, 5)

        top_stores = Store.objects.get_top_stores()

        self.assertEqual(['Best', 'Pair'],
                         [entry['name'] for entry in top_stores])
        self.assertEqual(4.0, top_stores[1]['average_rating'])
        self.assertEqual(2, len(top_stores[1]['reviews']))
        self.assertEqual(pair, top_stores[1]['store'])

    def test_top_stores_limit(self):
        for i in range(12):
            store = create_store(self.author, name='Store {}'.format(i))
            self.review(store, i % 5 + 1, 4)

        top_stores = Store.objects.get_top_stores()

        self.assertEqual(10, len(top_stores))
        averages = [entry['average_rating'] for entry in top_stores]
        self.assertEqual(sorted(averages, reverse=True), averages)

    def test_search(self):
        create_store(self.author, name='Cafe Blue')
        create_store(self.author, name='Green Tea',
                     description='Best blueberry muffins')
        create_store(self.author, name='Pizza Place')

        self.assertEqual(2, Store.objects.search('blue').count())

    def test_near(self):
        close = create_store(self.author, name='Close',
                             longitude=-79.3832, latitude=43.6532)
        closer = create_store(self.author, name='Closer',
                              longitude=-79.3800, latitude=43.6500)
        create_store(self.author, name='Far',
                     longitude=-73.5673, latitude=45.5017)

        stores = Store.objects.near(-79.3790, 43.6490)

        self.assertEqual([closer, close], stores)
        self.assertLess(stores[0].distance, stores[1].distance)


class StoreHeartsAndPermissionsTestCase(TestCase):
    def setUp(self):
        user_model = get_user_model()
        self.author = user_model.objects.create_user(
            'wes', 'wes@example.com', 'password')
        self.other = user_model.objects.create_user(
            'scott', 'scott@example.com', 'password')

    def test_toggle_heart(self):
        store = create_store(self.author)

        self.assertTrue(store.toggle_heart(self.other))
        self.assertEqual([store], list(self.other.hearts.all()))

        self.assertFalse(store.toggle_heart(self.other))
        self.assertEqual(0, self.other.hearts.count())

    def test_hearts_count_annotation(self):
        store = create_store(self.author)
        create_store(self.author, name='Green Tea')
        store.toggle_heart(self.author)
        store.toggle_heart(self.other)

        counts = dict(Store.objects.with_hearts_count()
                      .values_list('name', 'hearts_count'))

        self.assertEqual({'Cafe Blue': 2, 'Green Tea': 0}, counts)

    def test_author_permissions(self):
        store = create_store(self.author)

        self.assertTrue(self.author.has_perm('stores.change_store', store))
        self.assertTrue(self.author.has_perm('stores.delete_store', store))
        self.assertFalse(self.other.has_perm('stores.change_store', store))
