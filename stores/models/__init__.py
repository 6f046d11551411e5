from django.db.models.signals import post_save
from django.dispatch import receiver
from guardian.shortcuts import assign_perm

from .store import Store
from .review import Review


@receiver(post_save, sender=Store)
def grant_store_permissions_to_author(sender, instance, created, **kwargs):
    if created:
        # The author may edit and remove their own store
        assign_perm('change_store', instance.author, instance)
        assign_perm('delete_store', instance.author, instance)
