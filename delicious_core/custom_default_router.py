from rest_framework import routers


class CustomDefaultRouter(routers.DefaultRouter):
    def extend(self, router):
        self.registry.extend(router.registry)
