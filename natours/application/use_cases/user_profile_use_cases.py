"""Profile and user administration use cases"""

from typing import List

from ..dtos.user_dtos import UpdateMeDto, AdminUpdateUserDto, UserDto
from ...domain.entities.user import User
from ...domain.enums import UserRole
from ...domain.exceptions import ValidationFailure, NotFound, UniquenessViolation
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email
from ...domain.value_objects.entity_ids import UserId


class UserProfileUseCases:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def _change_email(self, user: User, email: str) -> Email:
        new_email = Email(email)
        if new_email != user.email and await self.unit_of_work.users.exists_by_email(new_email):
            raise UniquenessViolation("This email is already in use")
        return new_email

    async def update_me(self, current_user: User, request: UpdateMeDto) -> UserDto:
        if request.password is not None or request.password_confirm is not None:
            raise ValidationFailure(
                "This route is not for password updates. Please use /update-my-password."
            )

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(current_user.id)
            if not user:
                raise NotFound("No user found with that ID")

            email = await self._change_email(user, request.email) if request.email else None
            user.update_profile(name=request.name, email=email, photo=request.photo)
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()
            return UserDto.from_entity(user)

    async def delete_me(self, current_user: User) -> None:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(current_user.id)
            if not user:
                raise NotFound("No user found with that ID")
            user.deactivate()
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

    async def list_users(self, page: int, limit: int, include_inactive: bool = False) -> List[UserDto]:
        async with self.unit_of_work:
            users = await self.unit_of_work.users.get_paginated(page, limit, include_inactive)
            return [UserDto.from_entity(user) for user in users]

    async def get_user(self, user_id: UserId) -> UserDto:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id, include_inactive=True)
            if not user:
                raise NotFound("No user found with that ID")
            return UserDto.from_entity(user)

    async def update_user(self, user_id: UserId, request: AdminUpdateUserDto) -> UserDto:
        """Admin update; passwords are never changed here"""
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id, include_inactive=True)
            if not user:
                raise NotFound("No user found with that ID")

            email = await self._change_email(user, request.email) if request.email else None
            user.update_profile(name=request.name, email=email, photo=request.photo)
            if request.role is not None:
                try:
                    user.role = UserRole(request.role)
                except ValueError:
                    raise ValidationFailure("Role is either: user, guide, lead-guide, admin")
            if request.active is not None:
                user.active = request.active

            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()
            return UserDto.from_entity(user)

    async def delete_user(self, user_id: UserId) -> None:
        async with self.unit_of_work:
            # Through the review repository so the affected tours are recomputed
            for review in await self.unit_of_work.reviews.get_all(user_id=user_id):
                await self.unit_of_work.reviews.delete(review.id)
            if not await self.unit_of_work.users.delete(user_id):
                raise NotFound("No user found with that ID")
            await self.unit_of_work.commit()
