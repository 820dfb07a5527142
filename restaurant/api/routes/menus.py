from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from restaurant.api.deps import get_uow, require_staff
from restaurant.api.responses import Envelope, ok
from restaurant.application.schemas import MenuCreate, MenuRead, MenuUpdate
from restaurant.application.services.auth import CurrentUser
from restaurant.application.services.menus import MenuService
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter(prefix="/menu", tags=["menu"])


def _form_model(model, **fields):
    try:
        return model(**fields)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


def _image_parts(image: Optional[UploadFile]):
    if image is None or not image.filename:
        return None, None
    return image.filename, image.file


@router.get("", response_model=Envelope[list[MenuRead]])
def list_menus(uow: UnitOfWork = Depends(get_uow)):
    return ok([MenuRead.model_validate(m) for m in MenuService(uow).list()])


@router.get("/{menu_id}", response_model=Envelope[MenuRead])
def get_menu(menu_id: str, uow: UnitOfWork = Depends(get_uow)):
    return ok(MenuRead.model_validate(MenuService(uow).get(menu_id)))


@router.post("", response_model=Envelope[MenuRead], status_code=201)
def create_menu(
    name: str = Form(...),
    description: str = Form(...),
    price: float = Form(...),
    category: str = Form(...),
    image: Optional[UploadFile] = File(None),
    uow: UnitOfWork = Depends(get_uow),
    _: CurrentUser = Depends(require_staff),
):
    """Multipart form; ``image`` must be a .jpg, .jpeg or .png file."""
    data = _form_model(MenuCreate, name=name, description=description, price=price, category=category)
    image_name, image_file = _image_parts(image)
    menu = MenuService(uow).create(data, image_name, image_file)
    return ok(MenuRead.model_validate(menu), 201)


@router.patch("/{menu_id}", response_model=Envelope[MenuRead])
def update_menu(
    menu_id: str,
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[float] = Form(None),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    uow: UnitOfWork = Depends(get_uow),
    _: CurrentUser = Depends(require_staff),
):
    data = _form_model(MenuUpdate, name=name, description=description, price=price, category=category)
    image_name, image_file = _image_parts(image)
    menu = MenuService(uow).update(menu_id, data, image_name, image_file)
    return ok(MenuRead.model_validate(menu))


@router.delete("/{menu_id}", response_model=Envelope[None])
def delete_menu(menu_id: str, uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(require_staff)):
    MenuService(uow).delete(menu_id)
    return ok()


@router.patch("/{menu_id}/restore", response_model=Envelope[MenuRead])
def restore_menu(menu_id: str, uow: UnitOfWork = Depends(get_uow), _: CurrentUser = Depends(require_staff)):
    return ok(MenuRead.model_validate(MenuService(uow).restore(menu_id)))
