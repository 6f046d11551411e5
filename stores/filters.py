from django.contrib.auth import get_user_model
from django_filters import rest_framework

from stores.models import Store, Review


class StoreFilterSet(rest_framework.FilterSet):
    tag = rest_framework.CharFilter(
        method='_tag',
        label='Tag'
    )
    authors = rest_framework.ModelMultipleChoiceFilter(
        queryset=get_user_model().objects.all(),
        field_name='author',
        label='Authors'
    )

    def _tag(self, queryset, name, value):
        if value:
            return queryset.filter_by_tag(value)
        return queryset

    class Meta:
        model = Store
        fields = []


class ReviewFilterSet(rest_framework.FilterSet):
    stores = rest_framework.ModelMultipleChoiceFilter(
        queryset=Store.objects.all(),
        field_name='store',
        label='Stores'
    )

    @property
    def qs(self):
        return super(ReviewFilterSet, self).qs.select_related(
            'store', 'author')

    class Meta:
        model = Review
        fields = []
