from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from stores.models import Store, Review

LOCATION_FIELDS = ('location_type', 'longitude', 'latitude', 'address')


class LocationSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=['Point'], default='Point')
    coordinates = serializers.ListField(
        child=serializers.FloatField(), min_length=2, max_length=2,
        error_messages={'required': 'You must supply coordinates!'})
    address = serializers.CharField(
        max_length=500,
        error_messages={
            'required': 'You must supply an address!',
            'blank': 'You must supply an address!',
        })

    def validate_coordinates(self, value):
        longitude, latitude = value
        if not -180 <= longitude <= 180 or not -90 <= latitude <= 90:
            raise serializers.ValidationError(
                'Coordinates must be a valid [longitude, latitude] pair')
        return value


class StoreSerializer(serializers.HyperlinkedModelSerializer):
    url = serializers.HyperlinkedIdentityField(
        view_name='store-detail', lookup_field='slug')
    name = serializers.CharField(
        max_length=255,
        error_messages={
            'required': 'Please enter a store name!',
            'blank': 'Please enter a store name!',
        })
    description = serializers.CharField(required=False, allow_blank=True)
    tags = serializers.ListField(
        child=serializers.CharField(trim_whitespace=False, allow_blank=True),
        required=False)
    location = LocationSerializer()
    photo = serializers.ImageField(read_only=True)
    author = serializers.PrimaryKeyRelatedField(read_only=True)
    hearts = serializers.SerializerMethodField()

    def create(self, validated_data):
        store = Store(author=self.context['request'].user)
        return self._save(store, validated_data)

    def update(self, instance, validated_data):
        return self._save(instance, validated_data)

    def _save(self, store, validated_data):
        location = validated_data.pop('location', None)

        for field, value in validated_data.items():
            setattr(store, field, value)

        if location is not None:
            store.location = location

        try:
            store.save()
        except DjangoValidationError as err:
            raise serializers.ValidationError(store_errors(err))

        return store

    def get_hearts(self, store):
        # Listings annotate the count, freshly created stores do not
        hearts_count = getattr(store, 'hearts_count', None)
        if hearts_count is None:
            hearts_count = store.hearts.count()
        return hearts_count

    class Meta:
        model = Store
        fields = ('id', 'url', 'name', 'slug', 'description', 'tags',
                  'created', 'location', 'photo', 'author', 'hearts')
        read_only_fields = ('slug', 'created')


class NearStoreSerializer(StoreSerializer):
    distance = serializers.FloatField(read_only=True)

    class Meta(StoreSerializer.Meta):
        fields = StoreSerializer.Meta.fields + ('distance',)


class StoreSearchResultSerializer(serializers.HyperlinkedModelSerializer):
    url = serializers.HyperlinkedIdentityField(
        view_name='store-detail', lookup_field='slug')

    class Meta:
        model = Store
        fields = ('id', 'url', 'name', 'slug')


class ReviewSerializer(serializers.HyperlinkedModelSerializer):
    store = serializers.HyperlinkedRelatedField(
        view_name='store-detail', lookup_field='slug', read_only=True)
    author = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Review
        fields = ('id', 'url', 'store', 'author', 'text', 'rating',
                  'created')


class ReviewCreationSerializer(serializers.ModelSerializer):
    store = serializers.PrimaryKeyRelatedField(queryset=Store.objects.all())
    rating = serializers.IntegerField(min_value=1, max_value=5)

    @property
    def data(self):
        return ReviewSerializer(
            self.instance, context={'request': self.context['request']}).data

    def create(self, validated_data):
        validated_data['author'] = self.context['request'].user
        return super(ReviewCreationSerializer, self).create(validated_data)

    class Meta:
        model = Review
        fields = ('store', 'text', 'rating')


class TagCountSerializer(serializers.Serializer):
    tag = serializers.CharField()
    count = serializers.IntegerField()


class TopStoreSerializer(serializers.Serializer):
    store = serializers.HyperlinkedRelatedField(
        view_name='store-detail', lookup_field='slug', read_only=True)
    name = serializers.CharField()
    slug = serializers.SlugField()
    photo = serializers.ImageField()
    reviews = ReviewSerializer(many=True)
    average_rating = serializers.FloatField()


class HeartSerializer(serializers.Serializer):
    hearted = serializers.BooleanField()
    hearts = serializers.IntegerField()


def store_errors(err):
    """
    Converts a model ValidationError into serializer errors, reporting the
    columns that make up the location under the "location" key.
    """
    errors = {}

    for field, messages in err.message_dict.items():
        if field in LOCATION_FIELDS:
            field = 'location'
        errors.setdefault(field, [])
        errors[field].extend(
            message for message in messages
            if message not in errors[field])

    return errors
