from rest_framework.permissions import BasePermission, SAFE_METHODS


class StorePermission(BasePermission):
    """
    Anyone can browse stores and any authenticated user can create one.
    Editing or removing a store requires the matching object permission,
    which the author receives when the store is created.
    """
    object_perms_map = {
        'PUT': 'stores.change_store',
        'PATCH': 'stores.change_store',
        'DELETE': 'stores.delete_store',
    }

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True

        perm = self.object_perms_map.get(request.method)
        if perm is None:
            return True

        return request.user.has_perm(perm, obj)
