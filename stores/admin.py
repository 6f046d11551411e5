from django.contrib import admin
from guardian.admin import GuardedModelAdmin

from stores.models import Store, Review


@admin.register(Store)
class StoreModelAdmin(GuardedModelAdmin):
    list_display = ['__str__', 'slug', 'author', 'address', 'created']
    readonly_fields = ['slug', 'created']
    search_fields = ['name', 'description']
    raw_id_fields = ['author', 'hearts']


@admin.register(Review)
class ReviewModelAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'author', 'rating', 'created']
    readonly_fields = ['store', 'author', 'created']
