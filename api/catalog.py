# api/catalog.py
from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from core.catalog import FIELDS_AND_ROLES, SA_CITIES, get_roles_for_field

router = APIRouter(tags=["catalog"])


class RoleItem(BaseModel):
    value: str
    label: str


class FieldItem(BaseModel):
    value: str
    label: str
    roles: List[RoleItem]


@router.get("/fields", response_model=List[FieldItem])
async def list_fields() -> List[FieldItem]:
    return [
        FieldItem(
            value=f.value,
            label=f.label,
            roles=[RoleItem(value=r.value, label=r.label) for r in f.roles],
        )
        for f in FIELDS_AND_ROLES
    ]


@router.get("/fields/{field_value}/roles", response_model=List[RoleItem])
async def list_roles(field_value: str) -> List[RoleItem]:
    return [RoleItem(value=r.value, label=r.label) for r in get_roles_for_field(field_value)]


@router.get("/locations", response_model=List[str])
async def list_locations() -> List[str]:
    return list(SA_CITIES)
