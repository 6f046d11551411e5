import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction, IntegrityError
from django.db.models import Count, Q
from django.utils import timezone
from sorl.thumbnail import ImageField

from stores.aggregations import count_tags, rank_top_stores
from stores.slugs import base_slug, collision_pattern, suffixed_slug, \
    RESERVED_SLUGS
from stores.utils import haversine_distance

logger = logging.getLogger(__name__)

COORDINATES_REQUIRED = 'You must supply coordinates!'


class StoreQuerySet(models.QuerySet):
    def filter_by_tag(self, tag):
        # Tags live in a JSON column, so membership is checked in Python to
        # stay independent of the database backend
        stores_with_tag = [store_id for store_id, tags
                           in self.values_list('id', 'tags')
                           if tag in (tags or [])]

        return self.filter(pk__in=stores_with_tag)

    def search(self, terms):
        return self.filter(
            Q(name__icontains=terms) | Q(description__icontains=terms))

    def with_hearts_count(self):
        return self.annotate(hearts_count=Count('hearts', distinct=True))

    def get_tags_list(self):
        return count_tags(self.values_list('tags', flat=True))

    def get_top_stores(self, min_reviews=None, limit=None):
        if min_reviews is None:
            min_reviews = settings.STORE_TOP_MIN_REVIEWS
        if limit is None:
            limit = settings.STORE_TOP_LIMIT

        stores = self.prefetch_related('reviews')

        return rank_top_stores(
            ((store, store.reviews.all()) for store in stores),
            min_reviews=min_reviews,
            limit=limit)

    def near(self, longitude, latitude, max_distance=None, limit=None):
        if max_distance is None:
            max_distance = settings.STORE_NEAR_MAX_DISTANCE
        if limit is None:
            limit = settings.STORE_NEAR_LIMIT

        stores_in_range = []

        for store in self:
            store.distance = haversine_distance(
                longitude, latitude, store.longitude, store.latitude)
            if store.distance <= max_distance:
                stores_in_range.append(store)

        stores_in_range.sort(key=lambda s: s.distance)
        return stores_in_range[:limit]


class Store(models.Model):
    name = models.CharField(
        max_length=255, db_index=True,
        error_messages={
            'null': 'Please enter a store name!',
            'blank': 'Please enter a store name!',
        })
    slug = models.SlugField(max_length=255, unique=True, editable=False)
    description = models.TextField(blank=True, default='')
    tags = models.JSONField(default=list, blank=True)
    created = models.DateTimeField(default=timezone.now, editable=False)
    location_type = models.CharField(max_length=20, default='Point')
    longitude = models.FloatField(
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
        error_messages={'null': COORDINATES_REQUIRED})
    latitude = models.FloatField(
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
        error_messages={'null': COORDINATES_REQUIRED})
    address = models.CharField(
        max_length=500,
        error_messages={
            'null': 'You must supply an address!',
            'blank': 'You must supply an address!',
        })
    photo = ImageField(upload_to='stores', blank=True)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
        related_name='stores',
        error_messages={'null': 'You must supply an author'})
    hearts = models.ManyToManyField(
        settings.AUTH_USER_MODEL, blank=True, related_name='hearts')

    objects = StoreQuerySet.as_manager()

    def __str__(self):
        return self.name

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super(Store, cls).from_db(db, field_names, values)
        instance._loaded_values = dict(zip(field_names, values))
        return instance

    @property
    def location(self):
        if self.longitude is None or self.latitude is None:
            coordinates = None
        else:
            coordinates = [self.longitude, self.latitude]

        return {
            'type': self.location_type,
            'coordinates': coordinates,
            'address': self.address,
        }

    @location.setter
    def location(self, value):
        if 'type' in value:
            self.location_type = value['type'] or 'Point'
        if 'coordinates' in value:
            coordinates = value['coordinates']
            if isinstance(coordinates, (list, tuple)) and \
                    len(coordinates) == 2:
                self.longitude, self.latitude = coordinates
            else:
                # Anything but a [lng, lat] pair counts as missing, which
                # full_clean reports on the coordinate fields
                self.longitude, self.latitude = None, None
        if 'address' in value:
            self.address = value['address']

    def name_changed(self):
        if self._state.adding:
            return True

        loaded_values = getattr(self, '_loaded_values', {})

        if 'name' in loaded_values:
            loaded_name = loaded_values['name']
        else:
            loaded_name = type(self).objects.filter(pk=self.pk) \
                .values_list('name', flat=True).first()

        return self.name != loaded_name

    def normalize(self):
        if self.name is not None:
            self.name = self.name.strip()
        if self.description is not None:
            self.description = self.description.strip()

    def clean(self):
        if not isinstance(self.tags, list) or \
                not all(isinstance(tag, str) for tag in self.tags):
            raise ValidationError({'tags': 'Tags must be a list of strings'})

    def save(self, *args, **kwargs):
        self.normalize()
        self.full_clean(exclude=['slug'])

        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'name' not in update_fields:
            super(Store, self).save(*args, **kwargs)
        elif self.name_changed():
            if update_fields is not None:
                kwargs['update_fields'] = set(update_fields) | {'slug'}
            self._save_with_unique_slug(*args, **kwargs)
        else:
            super(Store, self).save(*args, **kwargs)

        self._loaded_values = {'name': self.name}

    def _save_with_unique_slug(self, *args, **kwargs):
        base = base_slug(self.name)

        siblings = Store.objects.filter(slug__iregex=collision_pattern(base))
        if self.pk is not None:
            siblings = siblings.exclude(pk=self.pk)

        collisions = siblings.count()
        if not collisions and base in RESERVED_SLUGS:
            collisions = 1

        self.slug = suffixed_slug(base, collisions)
        retries = 0

        while True:
            try:
                with transaction.atomic():
                    super(Store, self).save(*args, **kwargs)
                break
            except IntegrityError:
                # Another store took the slug between the count and the write
                if retries >= settings.STORE_SLUG_MAX_RETRIES or \
                        not self._slug_taken():
                    raise
                retries += 1
                collisions += 1
                logger.warning('Slug "%s" already taken, retrying',
                               self.slug)
                self.slug = suffixed_slug(base, collisions)

        logger.info('Store "%s" saved with slug "%s"', self.name, self.slug)

    def _slug_taken(self):
        return Store.objects.filter(slug__iexact=self.slug) \
            .exclude(pk=self.pk).exists()

    def toggle_heart(self, user):
        if self.hearts.filter(pk=user.pk).exists():
            self.hearts.remove(user)
            hearted = False
        else:
            self.hearts.add(user)
            hearted = True

        logger.info('User %s %s store "%s"', user.pk,
                    'hearted' if hearted else 'unhearted', self.slug)
        return hearted

    class Meta:
        app_label = 'stores'
        ordering = ['-created', '-id']
