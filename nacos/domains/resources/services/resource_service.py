"""Resource service layer."""

from __future__ import annotations

import logging
from typing import Optional

from flask import current_app
from sqlalchemy import or_
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from nacos.core.auth.session_models import Identity
from nacos.core.utils.pagination import paginate
from nacos.core.utils.uploads import remove_upload, store_upload, upload_size
from nacos.domains.resources.models.resource_models import Resource
from nacos.domains.resources.schemas.resource_schemas import ResourceForm, ResourceListFilter
from nacos.extensions import db

logger = logging.getLogger(__name__)

UPLOAD_SUBDIR = "resources"


def list_resources(filters: ResourceListFilter) -> dict:
    query = Resource.query
    if filters.search:
        term = f"%{filters.search.strip()}%"
        query = query.filter(or_(Resource.title.ilike(term), Resource.description.ilike(term)))
    if filters.type:
        query = query.filter(Resource.resource_type == filters.type)
    if filters.level:
        query = query.filter(Resource.level == filters.level)
    if filters.featured is not None:
        query = query.filter(Resource.is_featured.is_(filters.featured))
    query = query.order_by(Resource.upload_date.desc(), Resource.id.desc())
    return paginate(query, page=filters.page, per_page=filters.per_page)


def get_resource(resource_id: int) -> Optional[Resource]:
    return db.session.get(Resource, resource_id)


def _save_file(upload: Optional[FileStorage]) -> Optional[tuple[str, str, int]]:
    """Store the upload first so a rejected file leaves the database untouched."""
    if upload is None or not upload.filename:
        return None
    size = upload_size(upload)
    stored = store_upload(
        upload,
        subdir=UPLOAD_SUBDIR,
        allowed=current_app.config["RESOURCE_ALLOWED_EXTENSIONS"],
        max_bytes=current_app.config["RESOURCE_MAX_BYTES"],
    )
    return stored, secure_filename(upload.filename), size


def _apply(resource: Resource, data: ResourceForm) -> None:
    resource.title = data.title
    resource.description = data.description
    resource.resource_type = data.resource_type
    resource.level = data.level
    resource.course_code = data.course_code
    resource.tags = data.tags
    resource.external_link = data.external_link
    resource.is_featured = data.is_featured


def create_resource(data: ResourceForm, actor: Identity, upload: Optional[FileStorage] = None) -> Resource:
    saved = _save_file(upload)
    resource = Resource(uploaded_by=actor.id)
    _apply(resource, data)
    if saved:
        resource.file_path, resource.file_name, resource.file_size = saved
    db.session.add(resource)
    db.session.commit()
    logger.info("Resource %s added by %s", resource.id, actor.id)
    return resource


def update_resource(resource_id: int, data: ResourceForm, upload: Optional[FileStorage] = None) -> Resource:
    resource = get_resource(resource_id)
    if resource is None:
        raise ValueError("not_found")
    saved = _save_file(upload)
    previous_file = resource.file_path
    _apply(resource, data)
    if saved:
        resource.file_path, resource.file_name, resource.file_size = saved
    db.session.commit()
    if saved and previous_file:
        remove_upload(previous_file)
    return resource


def delete_resource(resource_id: int) -> bool:
    resource = get_resource(resource_id)
    if resource is None:
        return False
    file_path = resource.file_path
    db.session.delete(resource)
    db.session.commit()
    remove_upload(file_path)
    return True
