"""Tests for dog creation."""

from datetime import date

import pytest

from k9fetch.db import repo
from k9fetch.services.dogs import (
    DogInput,
    DuplicateDogCodeError,
    build_dog_entity,
    create_dog,
)


class TestBuildDogEntity:
    """Test build_dog_entity() - pure normalization."""

    def test_trims_and_blanks_to_none(self):
        dog = build_dog_entity(
            DogInput(dog_code="  A-001 ", name=" Lobo ", breed="  ", sex="M", notes="")
        )
        assert dog.dog_code == "A-001"
        assert dog.name == "Lobo"
        assert dog.breed is None
        assert dog.sex == "M"
        assert dog.notes is None
        assert dog.active is True
        assert dog.id
        assert dog.created_at is not None

    @pytest.mark.parametrize("code,name", [("", "Lobo"), ("A-001", "   "), (" ", "")])
    def test_code_and_name_required(self, code, name):
        with pytest.raises(ValueError, match="Code and name are required"):
            build_dog_entity(DogInput(dog_code=code, name=name))


class TestCreateDog:
    """Test create_dog()."""

    def test_stores_dog(self, session):
        dog = create_dog(
            session,
            DogInput(dog_code="A-001", name="Lobo", birthdate=date(2021, 4, 2), active=False),
        )

        stored = repo.get_dog(session, dog.id)
        assert stored.name == "Lobo"
        assert stored.birthdate == date(2021, 4, 2)
        assert stored.active is False

    def test_duplicate_code_rejected(self, session):
        create_dog(session, DogInput(dog_code="A-001", name="Lobo"))

        with pytest.raises(DuplicateDogCodeError):
            create_dog(session, DogInput(dog_code=" A-001", name="Mora"))

        assert len(repo.list_dogs(session)) == 1

    def test_blank_input_not_stored(self, session):
        with pytest.raises(ValueError):
            create_dog(session, DogInput(dog_code="", name="Lobo"))
        assert repo.list_dogs(session) == []
