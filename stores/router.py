from rest_framework import routers

from stores.views import StoreViewSet, ReviewViewSet

router = routers.SimpleRouter()
router.register(r'stores', StoreViewSet)
router.register(r'reviews', ReviewViewSet)
