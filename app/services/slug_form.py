"""Name and slug fields of a category or product dialog."""
from typing import Callable, Optional

from app.models.slug import SlugFormState
from app.services.slug_oracle import SlugOracle
from app.services.slug_validator import SlugValidator
from app.utils.slug import normalize, resolve_unique


class SlugForm:
    """
    Keeps a dialog's slug in step with its name and validates it live.

    While creating, the slug follows the name until the user edits the
    slug field by hand. While editing (``entity_id`` set), the slug only
    changes when the user types it or asks for a regenerated one, and the
    entity's own slug never counts as a collision.
    """

    def __init__(
        self,
        oracle: SlugOracle,
        entity_id: Optional[int] = None,
        name: str = "",
        slug: str = "",
        delay: float = 0.4,
        timeout: Optional[float] = None,
        on_change: Optional[Callable[[SlugFormState], None]] = None,
    ):
        self.oracle = oracle
        self.entity_id = entity_id
        self.name = name
        self.slug = slug
        self.overridden = bool(entity_id is not None or slug)
        if not self.overridden:
            self.slug = normalize(name)
        self._on_change = on_change
        self.validator = SlugValidator(
            oracle.exists,
            delay=delay,
            timeout=timeout,
            on_change=lambda _: self._notify(),
        )
        if self.slug:
            self.validator.submit(self.slug, self.entity_id)

    @property
    def creating(self) -> bool:
        return self.entity_id is None

    @property
    def can_save(self) -> bool:
        return bool(self.name.strip() and self.slug.strip() and self.validator.can_save)

    @property
    def state(self) -> SlugFormState:
        return SlugFormState(
            name=self.name,
            slug=self.slug,
            status=self.validator.status,
            can_save=self.can_save,
        )

    def set_name(self, name: str) -> None:
        """Name field changed; derive the slug from it unless overridden."""
        self.name = name
        if self.creating and not self.overridden:
            self._apply_slug(normalize(name))
        else:
            self._notify()

    def set_slug(self, slug: str) -> None:
        """Slug field edited by hand. Clearing it hands it back to the name."""
        self.overridden = bool(slug.strip())
        self._apply_slug(slug)

    async def regenerate(self) -> str:
        """Replace the slug with a fresh unique one derived from the name."""
        slug = await resolve_unique(self.name, self.oracle.excluding(self.entity_id))
        self.overridden = True
        self._apply_slug(slug)
        return slug

    async def slug_for_save(self) -> str:
        """
        Slug to send with the save request.

        A slug still derived from the name of a new entity is made unique
        first; a slug the user chose is sent as typed.
        """
        if self.creating and not self.overridden:
            slug = await resolve_unique(self.name, self.oracle.excluding(None))
            if slug != self.slug:
                self._apply_slug(slug)
            return slug
        return self.slug.strip()

    async def wait(self) -> None:
        await self.validator.wait()

    def close(self) -> None:
        self.validator.close()

    def _apply_slug(self, slug: str) -> None:
        self.slug = slug
        self.validator.submit(slug, self.entity_id)
        self._notify()

    def _notify(self) -> None:
        if self._on_change:
            self._on_change(self.state)
