from collections import Counter


def count_tags(tag_lists):
    """
    Flattens the given tag sequences and counts how many times each tag
    appears. Returns a list of {'tag', 'count'} dicts, most used first.
    Tags with the same count keep the order in which they were first seen.
    """
    counter = Counter()

    for tags in tag_lists:
        counter.update(tags or [])

    return [{'tag': tag, 'count': count}
            for tag, count in counter.most_common()]


def average_rating(reviews):
    ratings = [review.rating for review in reviews]
    if not ratings:
        return None
    return sum(ratings) / float(len(ratings))


def rank_top_stores(entries, min_reviews=2, limit=10):
    """
    Takes (store, reviews) pairs and returns the best rated stores.

    Stores with less than min_reviews reviews are left out entirely. The
    rest are sorted by the mean of their review ratings, highest first, and
    at most limit of them are returned.
    """
    ranked = []

    for store, reviews in entries:
        reviews = list(reviews)

        if len(reviews) < min_reviews:
            continue

        ranked.append({
            'store': store,
            'name': store.name,
            'slug': store.slug,
            'photo': store.photo,
            'reviews': reviews,
            'average_rating': average_rating(reviews),
        })

    ranked.sort(key=lambda entry: entry['average_rating'], reverse=True)

    return ranked[:limit]
