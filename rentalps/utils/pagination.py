"""
List contract shared by the CRUD endpoints:
``{data, meta: {page, limit, total, totalPages}}``.
"""
import math

from flask import current_app, request

from rentalps.utils.validators import parse_flag


def page_args():
    """page >= 1, limit clamped to 1..MAX_ITEMS_PER_PAGE"""
    default_limit = current_app.config['ITEMS_PER_PAGE']
    max_limit = current_app.config['MAX_ITEMS_PER_PAGE']

    page = request.args.get('page', 1, type=int) or 1
    limit = request.args.get('limit', default_limit, type=int) or default_limit
    return max(page, 1), min(max(limit, 1), max_limit)


def build_meta(page, limit, total):
    return {
        'page': page,
        'limit': limit,
        'total': total,
        'totalPages': max(1, math.ceil(total / limit)) if limit else 1,
    }


def paginated_response(query, serialize=None, *, allow_all=True):
    """
    Run ``query`` as one page (or the whole collection when ``?all=true``).

    ``serialize`` turns a row into a dict, defaults to ``row.to_dict()``.
    """
    serialize = serialize or (lambda row: row.to_dict())

    if allow_all and parse_flag(request.args.get('all')):
        rows = query.all()
        return {
            'data': [serialize(row) for row in rows],
            'meta': build_meta(1, len(rows) or 1, len(rows)),
        }

    page, limit = page_args()
    pagination = query.paginate(page=page, per_page=limit, error_out=False)
    return {
        'data': [serialize(row) for row in pagination.items],
        'meta': build_meta(page, limit, pagination.total or 0),
    }
