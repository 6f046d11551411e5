import logging

from django.conf import settings
from django_filters import rest_framework
from rest_framework import viewsets, permissions, status, mixins
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.response import Response

from stores.drf_extensions import PermissionModelViewSet
from stores.filters import StoreFilterSet, ReviewFilterSet
from stores.forms.store_near_form import StoreNearForm
from stores.forms.store_search_form import StoreSearchForm
from stores.models import Store, Review
from stores.pagination import StorePagination, ReviewPagination
from stores.permissions import StorePermission
from stores.serializers import StoreSerializer, NearStoreSerializer, \
    StoreSearchResultSerializer, ReviewSerializer, \
    ReviewCreationSerializer, TagCountSerializer, TopStoreSerializer, \
    HeartSerializer

logger = logging.getLogger(__name__)


class StoreViewSet(PermissionModelViewSet):
    queryset = Store.objects.select_related('author').with_hearts_count()
    serializer_class = StoreSerializer
    permission_classes = (StorePermission,)
    pagination_class = StorePagination
    filter_backends = (rest_framework.DjangoFilterBackend, SearchFilter,
                       OrderingFilter)
    filterset_class = StoreFilterSet
    search_fields = ('name', 'description')
    ordering_fields = ('created', 'name')
    lookup_field = 'slug'

    def perform_destroy(self, instance):
        logger.info('Deleting store "%s"', instance.slug)
        instance.delete()

    @action(detail=False)
    def tags(self, request, *args, **kwargs):
        tags = Store.objects.get_tags_list()
        serializer = TagCountSerializer(tags, many=True)
        return Response(serializer.data)

    @action(detail=False)
    def top(self, request, *args, **kwargs):
        top_stores = Store.objects.get_top_stores()
        serializer = TopStoreSerializer(top_stores, many=True,
                                        context={'request': request})
        return Response(serializer.data)

    @action(detail=False)
    def search(self, request, *args, **kwargs):
        form = StoreSearchForm(request.query_params)

        if not form.is_valid():
            return Response({
                'errors': form.errors
            }, status=status.HTTP_400_BAD_REQUEST)

        stores = Store.objects.search(form.cleaned_data['q']) \
            .order_by('name')[:settings.STORE_SEARCH_LIMIT]
        serializer = StoreSearchResultSerializer(
            stores, many=True, context={'request': request})
        return Response(serializer.data)

    @action(detail=False)
    def near(self, request, *args, **kwargs):
        form = StoreNearForm(request.query_params)

        if not form.is_valid():
            return Response({
                'errors': form.errors
            }, status=status.HTTP_400_BAD_REQUEST)

        cleaned_data = form.cleaned_data
        stores = Store.objects.select_related('author').with_hearts_count() \
            .near(cleaned_data['lng'], cleaned_data['lat'],
                  max_distance=cleaned_data['max_distance'])

        serializer = NearStoreSerializer(stores, many=True,
                                         context={'request': request})
        return Response(serializer.data)

    @action(detail=False, permission_classes=(permissions.IsAuthenticated,))
    def hearts(self, request, *args, **kwargs):
        # Annotating before filtering keeps the count over every heart
        stores = Store.objects.select_related('author').with_hearts_count() \
            .filter(hearts=request.user)
        serializer = StoreSerializer(stores, many=True,
                                     context={'request': request})
        return Response(serializer.data)

    @action(detail=True, methods=['post'],
            permission_classes=(permissions.IsAuthenticated,))
    def heart(self, request, *args, **kwargs):
        store = self.get_object()
        hearted = store.toggle_heart(request.user)

        serializer = HeartSerializer({
            'hearted': hearted,
            'hearts': store.hearts.count()
        })
        return Response(serializer.data)


class ReviewViewSet(mixins.CreateModelMixin,
                    mixins.RetrieveModelMixin,
                    mixins.ListModelMixin,
                    viewsets.GenericViewSet):
    queryset = Review.objects.all()
    serializer_class = ReviewSerializer
    permission_classes = (permissions.IsAuthenticatedOrReadOnly,)
    pagination_class = ReviewPagination
    filter_backends = (rest_framework.DjangoFilterBackend, OrderingFilter)
    filterset_class = ReviewFilterSet
    ordering_fields = ('created', 'rating')

    def get_serializer_class(self):
        if self.action == 'create':
            return ReviewCreationSerializer
        else:
            return ReviewSerializer
