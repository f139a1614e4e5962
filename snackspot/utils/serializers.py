"""JSON shapes returned by the API (camelCase keys)."""


def _iso(value):
    return value.isoformat() if value else None


def _number(value):
    return float(value) if value is not None else None


def user_summary(user):
    return {'id': user.id, 'username': user.username}


def user_profile(user, stats=None):
    data = {
        'id': user.id,
        'username': user.username,
        'level': user.level,
        'experiencePoints': user.experience_points,
        'bio': user.bio,
        'avatarEmoji': user.avatar_emoji,
        'createdAt': _iso(user.created_at),
    }
    if stats is not None:
        data['statistics'] = stats
    return data


def private_profile(user):
    data = user_profile(user)
    data['email'] = user.email
    return data


def category_dict(category):
    return {
        'id': category.id,
        'name': category.name,
        'slug': category.slug,
        'description': category.description,
        'createdAt': _iso(category.created_at),
    }


def store_summary(store):
    return {
        'id': store.id,
        'name': store.name,
        'address': store.address,
        'latitude': _number(store.latitude),
        'longitude': _number(store.longitude),
    }


def store_dict(store, snack_count=None):
    data = store_summary(store)
    data['createdAt'] = _iso(store.created_at)
    data['createdBy'] = store.created_by_user_id
    if snack_count is not None:
        data['snackCount'] = snack_count
    return data


def review_dict(review, include_snack=False):
    data = {
        'id': review.id,
        'snackId': review.snack_id,
        'rating': review.rating,
        'comment': review.comment,
        'createdAt': _iso(review.created_at),
        'updatedAt': _iso(review.updated_at),
        'user': user_summary(review.user),
    }
    if include_snack:
        data['snackName'] = review.snack.name
    return data


def snack_summary(snack, distance=None):
    data = {
        'id': snack.id,
        'name': snack.name,
        'description': snack.description,
        'categoryId': snack.category_id,
        'category': snack.category.name,
        'hasImage': snack.has_image,
        'store': store_summary(snack.store),
        'averageRating': _number(snack.average_rating),
        'totalRatings': snack.total_ratings,
        'createdAt': _iso(snack.created_at),
        'dataSource': snack.data_source.value,
        'user': user_summary(snack.user),
    }
    if distance is not None:
        data['distanceMeters'] = round(distance, 1)
    return data


def snack_detail(snack):
    data = snack_summary(snack)
    data['reviews'] = [review_dict(r) for r in snack.get_visible_reviews()]
    return data
