from guardian.core import ObjectPermissionChecker
from guardian.shortcuts import get_perms
from rest_framework import mixins
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet


class PermissionListModelMixin(object):
    """
    Reimplements DRF List Mixin to include user permission for its objects
    """
    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())

        page = self.paginate_queryset(queryset)
        objects = list(page if page is not None else queryset)

        serializer = self.get_serializer(objects, many=True)
        response_data = serializer.data

        # Add user permissions

        if objects:
            perms_checker = ObjectPermissionChecker(request.user)
            perms_checker.prefetch_perms(objects)

            for idx, obj in enumerate(objects):
                response_data[idx]['permissions'] = \
                    perms_checker.get_perms(obj)

        if page is not None:
            return self.get_paginated_response(response_data)

        return Response(response_data)


class PermissionRetrieveModelMixin(object):
    """
    Reimplements DRF Retrieve Mixin to include user permission for the object
    """
    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance)

        response_data = serializer.data

        # Add permissions

        response_data['permissions'] = get_perms(request.user, instance)

        return Response(response_data)


class PermissionModelViewSet(PermissionRetrieveModelMixin,
                             PermissionListModelMixin,
                             mixins.CreateModelMixin,
                             mixins.UpdateModelMixin,
                             mixins.DestroyModelMixin,
                             GenericViewSet):
    """
    Variation of DRF ModelViewSet that includes user permissions
    for the objects it retrieves
    """
    pass
