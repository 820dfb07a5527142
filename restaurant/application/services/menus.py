from typing import BinaryIO, Optional, Sequence

from restaurant.application.errors import NotFoundError
from restaurant.application.schemas import MenuCreate, MenuUpdate
from restaurant.domain.models import Menu
from restaurant.infrastructure.storage import delete_image, save_image
from restaurant.infrastructure.unit_of_work import UnitOfWork
from shared.core import get_logger

logger = get_logger(__name__)

IMAGE_FOLDER = "menu"


class MenuService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def list(self) -> Sequence[Menu]:
        return self.uow.menus.list()

    def get(self, menu_id: str) -> Menu:
        menu = self.uow.menus.get(menu_id)
        if not menu:
            raise NotFoundError("Menu not found")
        return menu

    def create(
        self,
        data: MenuCreate,
        image_name: Optional[str] = None,
        image: Optional[BinaryIO] = None,
    ) -> Menu:
        image_url = save_image(IMAGE_FOLDER, image_name, image) if image is not None else None
        try:
            with self.uow:
                menu = self.uow.menus.add(Menu(**data.model_dump(), image_url=image_url, rating=0))
        except Exception:
            if image_url:
                delete_image(image_url)
            raise
        logger.info("Menu created", extra={"extra_fields": {"menu_id": menu.id}})
        return menu

    def update(
        self,
        menu_id: str,
        data: MenuUpdate,
        image_name: Optional[str] = None,
        image: Optional[BinaryIO] = None,
    ) -> Menu:
        menu = self.get(menu_id)
        new_image = save_image(IMAGE_FOLDER, image_name, image) if image is not None else None
        old_image = menu.image_url
        try:
            with self.uow:
                for field, value in data.model_dump(exclude_none=True).items():
                    setattr(menu, field, value)
                if new_image:
                    menu.image_url = new_image
                menu = self.uow.menus.save(menu)
        except Exception:
            if new_image:
                delete_image(new_image)
            raise
        if new_image and old_image:
            delete_image(old_image)
        return menu

    def delete(self, menu_id: str) -> None:
        with self.uow:
            self.uow.menus.soft_delete(self.get(menu_id))

    def restore(self, menu_id: str) -> Menu:
        with self.uow:
            menu = self.uow.menus.get_deleted(menu_id)
            if not menu:
                raise NotFoundError("Deleted menu not found")
            menu = self.uow.menus.restore(menu)
        return menu
