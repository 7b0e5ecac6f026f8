"""
User Repositories

Site users, the characters they claim, and admin accounts.

Common Operations:
==================
- UserRepository.get_by_battle_tag()       → exact match, then case-insensitive
- UserRepository.connect_battle_net()      → refuses ids owned by another user
- UserCharacterRepository.set_main()       → single-statement "only one main"
- AdminUserRepository.verify_credentials() → bcrypt check + last-login stamp
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from sqlalchemy import func, select

from guttakrutt.shared.core.exceptions import ConflictError
from guttakrutt.shared.core.logging import get_logger
from guttakrutt.shared.repositories.base import (
    BaseRepository,
    read_operation,
    write_operation,
)
from guttakrutt.shared.schemas.account import AdminUser, User, UserCharacter
from guttakrutt.shared.schemas.guild import Character, LinkedCharacter
from guttakrutt.shared.utils.clock import utcnow
from guttakrutt.shared.utils.security import SecurityUtils


logger = get_logger("guttakrutt.repositories.users")


class UserRepository(BaseRepository[User]):
    """Repository for the users table."""

    table_name = "users"
    schema = User
    entity = "user"
    touch_field = None

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _by(self, field: str, value: Any) -> Optional[User]:
        return await self.select_one(
            select(self.table).where(self.col(field) == value).order_by(self.table.c.id).limit(1)
        )

    @read_operation()
    async def get_by_username(self, username: str) -> Optional[User]:
        return await self._by("username", username)

    @read_operation()
    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._by("email", email)

    @read_operation()
    async def get_by_battle_net_id(self, battle_net_id: str) -> Optional[User]:
        return await self._by("battleNetId", battle_net_id)

    @read_operation()
    async def get_by_battle_tag(self, battle_tag: str) -> Optional[User]:
        """
        Get a user by BattleTag.

        Tries an exact match first, then falls back to a case-insensitive
        comparison ("Truedps#2101" finds "truedps#2101").

        SQL Generated:
            SELECT * FROM users WHERE battle_tag = 'Truedps#2101'
            SELECT * FROM users WHERE lower(battle_tag) = lower('Truedps#2101')
        """
        user = await self._by("battleTag", battle_tag)
        if user is not None:
            return user
        return await self.select_one(
            select(self.table)
            .where(func.lower(self.col("battleTag")) == func.lower(battle_tag))
            .order_by(self.table.c.id)
            .limit(1)
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # ACCOUNT UPDATES
    # ═══════════════════════════════════════════════════════════════════════════

    async def update_tokens(
        self,
        user_id: int,
        access_token: str,
        refresh_token: str,
        token_expiry: datetime,
    ) -> Optional[User]:
        """Store fresh OAuth tokens and count it as a login."""
        return await self.update(
            user_id,
            {
                "accessToken": access_token,
                "refreshToken": refresh_token,
                "tokenExpiry": token_expiry,
                "lastLogin": utcnow(),
            },
        )

    async def update_last_login(self, user_id: int) -> Optional[User]:
        return await self.update(user_id, {"lastLogin": utcnow()})

    @write_operation("connect Battle.net account for")
    async def connect_battle_net(
        self,
        user_id: int,
        battle_net_id: str,
        battle_tag: str,
        access_token: str,
        refresh_token: str,
        token_expiry: datetime,
    ) -> Optional[User]:
        """
        Link a Battle.net identity to an existing user.

        Raises:
            ConflictError: The Battle.net id already belongs to another user
            StorageError: The update failed
        """
        owner = await self.get_by_battle_net_id(battle_net_id)
        if owner is not None and owner.id != user_id:
            logger.warning(
                "Battle.net id already linked",
                battle_net_id=battle_net_id,
                owner_id=owner.id,
                user_id=user_id,
            )
            raise ConflictError(
                "This Battle.net account is already connected to another user account",
                details={"battle_net_id": battle_net_id},
            )

        return await self.update(
            user_id,
            {
                "battleNetId": battle_net_id,
                "battleTag": battle_tag,
                "accessToken": access_token,
                "refreshToken": refresh_token,
                "tokenExpiry": token_expiry,
                "lastLogin": utcnow(),
            },
        )

    async def update_battle_net_data(self, user_id: int, data: Mapping[str, Any]) -> Optional[User]:
        """Refresh Battle.net-derived fields (battleTag, avatarUrl, ...) after a login."""
        return await self.update(user_id, data)


class UserCharacterRepository(BaseRepository[UserCharacter]):
    """
    Repository for the user_characters link table.

    At most one link per user has isMain set. set_main() moves the flag with
    one UPDATE scoped to the user, so there is no moment with zero or two
    mains.
    """

    table_name = "user_characters"
    schema = UserCharacter
    entity = "user character"
    touch_field = None

    def _linked(self, user_id: int):
        characters = self.tables.characters
        return (
            select(
                *characters.c,
                self.col("isMain"),
                self.col("verified"),
            )
            .select_from(
                self.table.join(characters, characters.c.id == self.col("characterId"))
            )
            .where(self.col("userId") == user_id)
        )

    @read_operation(list)
    async def get_linked_characters(self, user_id: int) -> list[LinkedCharacter]:
        """
        Characters a user has linked, main first, with the link's flags.

        SQL Generated:
            SELECT characters.*, uc.is_main, uc.verified
            FROM user_characters uc JOIN characters ON characters.id = uc.character_id
            WHERE uc.user_id = 4
            ORDER BY uc.is_main DESC, characters.name
        """
        statement = self._linked(user_id).order_by(
            self.col("isMain").desc(),
            self.col("name", self.tables.characters),
        )
        rows = await self.fetch_all(statement)
        return [LinkedCharacter.model_validate(self.fields.from_storage_row(row)) for row in rows]

    @read_operation()
    async def get_main_character(self, user_id: int) -> Optional[Character]:
        statement = self._linked(user_id).where(self.col("isMain").is_(True)).limit(1)
        row = await self.fetch_one(statement)
        if row is None:
            return None
        return Character.model_validate(self.fields.from_storage_row(row))

    @read_operation()
    async def get_link(self, user_id: int, character_id: int) -> Optional[UserCharacter]:
        return await self.select_one(
            select(self.table)
            .where(self.col("userId") == user_id, self.col("characterId") == character_id)
            .order_by(self.table.c.id)
            .limit(1)
        )

    @read_operation(bool)
    async def user_owns(self, user_id: int, character_id: int) -> bool:
        statement = (
            select(func.count())
            .select_from(self.table)
            .where(self.col("userId") == user_id, self.col("characterId") == character_id)
        )
        return bool(await self.fetch_scalar(statement))

    async def link(
        self,
        user_id: int,
        character_id: int,
        is_main: bool = False,
        verified: bool = False,
    ) -> UserCharacter:
        """Create the link row; an existing link is returned unchanged."""
        existing = await self.get_link(user_id, character_id)
        if existing is not None:
            return existing
        return await self.create(
            {
                "userId": user_id,
                "characterId": character_id,
                "isMain": is_main,
                "verified": verified,
                "verifiedAt": utcnow() if verified else None,
            }
        )

    async def verify_ownership(self, user_id: int, character_id: int) -> Optional[UserCharacter]:
        """Mark a link verified; None if the user never linked the character."""
        link = await self.get_link(user_id, character_id)
        if link is None:
            return None
        return await self.update(link.id, {"verified": True, "verifiedAt": utcnow()})

    @write_operation("set main character for")
    async def set_main(self, user_id: int, character_id: int) -> bool:
        """
        Make one linked character the user's main.

        SQL Generated:
            UPDATE user_characters SET is_main = (character_id = 12) WHERE user_id = 4

        Returns:
            False when the user has no link to the character (nothing changes)
        """
        return await self.set_exclusive_flag(
            "isMain",
            character_id,
            scope={"userId": user_id},
            target_field="characterId",
        )


class AdminUserRepository(BaseRepository[AdminUser]):
    """Repository for the admin_users table."""

    table_name = "admin_users"
    schema = AdminUser
    entity = "admin user"

    @read_operation()
    async def get_by_username(self, username: str) -> Optional[AdminUser]:
        """
        Get an admin by username, ignoring case.

        SQL Generated:
            SELECT * FROM admin_users WHERE lower(username) = 'officer'
        """
        return await self.select_one(
            select(self.table)
            .where(func.lower(self.col("username")) == username.lower())
            .order_by(self.table.c.id)
            .limit(1)
        )

    @read_operation(list)
    async def get_all(self) -> list[AdminUser]:
        return await self.select_many(select(self.table).order_by(self.col("username")))

    async def verify_credentials(self, username: str, password: str) -> Optional[AdminUser]:
        """
        Check an admin login.

        Args:
            username: Username, any case
            password: Plain text password

        Returns:
            The admin with a fresh lastLogin on success, None otherwise.
            A hash below the current bcrypt cost is replaced on success.
        """
        admin = await self.get_by_username(username)
        if admin is None or not SecurityUtils.verify_password(password, admin.password):
            logger.info("Admin login rejected", username=username)
            return None
        changes: dict[str, Any] = {"lastLogin": utcnow()}
        if SecurityUtils.needs_rehash(admin.password):
            changes["password"] = SecurityUtils.hash_password(password)
            logger.info("Admin password hash upgraded", admin_id=admin.id)
        return await self.update(admin.id, changes) or admin
