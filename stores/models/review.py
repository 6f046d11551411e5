from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from .store import Store


class Review(models.Model):
    store = models.ForeignKey(
        Store, on_delete=models.CASCADE, related_name='reviews',
        error_messages={'null': 'You must supply a store!'})
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
        related_name='reviews',
        error_messages={'null': 'You must supply an author!'})
    text = models.TextField(
        error_messages={'blank': 'Your review must have text!'})
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)])
    created = models.DateTimeField(default=timezone.now, editable=False)

    def __str__(self):
        return '{}: {}'.format(self.store, self.rating)

    class Meta:
        app_label = 'stores'
        ordering = ['-created', '-id']
