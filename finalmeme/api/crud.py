# finalmeme/api/crud.py
"""
Uniform list/get/create/update/delete responses shared by the blueprints.

Each helper maps a repository result to the JSON body and status code the
API uses for that kind of operation. Errors are left to the global handlers.
"""

from flask import Response, jsonify
from marshmallow import Schema


def list_response(repository, schema: Schema):
    items = repository.query()
    return jsonify({"items": schema.dump(items, many=True), "count": repository.count()}), 200


def get_response(repository, item_id: str, schema: Schema):
    return jsonify(schema.dump(repository.query_by_id(item_id))), 200


def created_response(item, schema: Schema):
    return jsonify(schema.dump(item)), 201


def updated_response(item, schema: Schema):
    return jsonify(schema.dump(item)), 200


def deleted_response():
    return Response(status=204)
