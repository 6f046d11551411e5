import re

from django.utils.text import slugify

FALLBACK_SLUG = 'store'

# Leaves room for the numeric suffix inside the 255 chars of Store.slug
MAX_BASE_LENGTH = 240

# Names taken by list-level routes under /stores/
RESERVED_SLUGS = {'tags', 'top', 'search', 'near', 'hearts'}


def base_slug(name):
    slug = slugify(name or '')[:MAX_BASE_LENGTH].strip('-_')
    return slug or FALLBACK_SLUG


def collision_pattern(base):
    """
    Regex matching the base slug itself or the base slug followed by an
    hyphen and a numeric suffix, e.g. "cafe-blue" and "cafe-blue-3" but not
    "cafe-blue-bar".
    """
    return r'^{}(-[0-9]*)?$'.format(re.escape(base))


def suffixed_slug(base, collisions):
    if not collisions:
        return base
    return '{}-{}'.format(base, collisions + 1)
