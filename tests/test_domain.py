"""
Domain tests: entities, value objects, write hooks and token helpers
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from jose import jwt

from natours.core.security import (
    create_access_token,
    decode_access_token,
    hash_reset_token,
    verify_password,
)
from natours.domain.entities.review import Review
from natours.domain.entities.tour import Tour
from natours.domain.enums import TourDifficulty, WriteOperation
from natours.domain.exceptions import ValidationFailure
from natours.domain.repositories.write_hooks import WriteHooks
from natours.domain.slugs import slugify
from natours.domain.value_objects.email import Email
from natours.domain.value_objects.entity_ids import ReviewId, TourId, UserId
from natours.domain.value_objects.rating_summary import RatingSummary, round_rating


def _tour(**overrides):
    fields = dict(
        name="The Park Camper",
        duration=10,
        max_group_size=15,
        difficulty="medium",
        price=1497,
        summary="Breathing in Nature in America's most spectacular National Parks",
        image_cover="tour-5-cover.jpg",
    )
    fields.update(overrides)
    return Tour.create(**fields)


class TestReview:

    @pytest.mark.parametrize("rating", [0, 6, 4.5, True, None, "5"])
    def test_rating_out_of_domain(self, rating):
        with pytest.raises(ValidationFailure):
            Review.create(tour_id=TourId.generate(), user_id=UserId.generate(), rating=rating, text="Nice")

    @pytest.mark.parametrize("rating", [1, 5])
    def test_rating_bounds_accepted(self, rating):
        review = Review.create(tour_id=TourId.generate(), user_id=UserId.generate(), rating=rating, text="Nice")
        assert review.rating == rating

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationFailure, match="Review can not be empty!"):
            Review.create(tour_id=TourId.generate(), user_id=UserId.generate(), rating=4, text="   ")

    def test_revise_validates(self):
        review = Review.create(tour_id=TourId.generate(), user_id=UserId.generate(), rating=4, text="Nice")
        with pytest.raises(ValidationFailure):
            review.revise(rating=9)
        assert review.rating == 4


class TestTour:

    def test_create_sets_slug_and_default_ratings(self):
        tour = _tour()

        assert tour.slug == "the-park-camper"
        assert tour.ratings == RatingSummary(quantity=0, average=4.5)
        assert tour.difficulty == TourDifficulty.MEDIUM

    @pytest.mark.parametrize("name", ["Too short", "x" * 41, ""])
    def test_name_length(self, name):
        with pytest.raises(ValidationFailure):
            _tour(name=name)

    def test_discount_must_be_below_price(self):
        with pytest.raises(ValidationFailure):
            _tour(price=500, price_discount=500)

    def test_unknown_difficulty(self):
        with pytest.raises(ValidationFailure):
            _tour(difficulty="extreme")

    def test_update_ignores_ratings(self):
        tour = _tour()
        tour.update_details(price=1200, ratings=RatingSummary(quantity=99, average=1.0))

        assert tour.price == 1200
        assert tour.ratings == RatingSummary.empty()

    def test_update_renames_slug(self):
        tour = _tour()
        tour.update_details(name="The Northern Lights")

        assert tour.slug == "the-northern-lights"

    def test_update_rejects_identity_fields(self):
        tour = _tour()
        with pytest.raises(ValidationFailure):
            tour.update_details(id=TourId.generate())

    def test_duration_weeks(self):
        assert _tour(duration=14).duration_weeks == 2


class TestRatingSummary:

    @pytest.mark.parametrize("value, expected", [(4.65, 4.7), (4.64, 4.6), (4.0, 4.0), (4.666666, 4.7)])
    def test_round_half_up(self, value, expected):
        assert round_rating(value) == expected

    def test_from_stats_without_reviews(self):
        assert RatingSummary.from_stats(0, 0) == RatingSummary(quantity=0, average=4.5)

    @pytest.mark.parametrize("average", [0.5, 5.1])
    def test_average_range(self, average):
        with pytest.raises(ValidationFailure):
            RatingSummary(quantity=1, average=average)

    def test_negative_quantity(self):
        with pytest.raises(ValidationFailure):
            RatingSummary(quantity=-1, average=4.0)


class TestEmail:

    def test_lowercased(self):
        assert str(Email("  Jonas@Example.COM ")) == "jonas@example.com"

    @pytest.mark.parametrize("value", ["", "not-an-email", "a@"])
    def test_invalid(self, value):
        with pytest.raises(ValidationFailure):
            Email(value)


def test_slugify_folds_accents():
    assert slugify("The Wine Taster: Côte d'Or") == "the-wine-taster-cote-d-or"


class TestWriteHooks:

    async def test_before_context_reaches_after(self):
        hooks = WriteHooks()
        seen = []

        async def before(target):
            return f"captured {target}"

        async def after(context):
            seen.append(context)

        hooks.register(WriteOperation.DELETE, after=after, before=before)
        pending = await hooks.run_before(WriteOperation.DELETE, "review-1")

        assert seen == []
        await pending.complete()
        assert seen == ["captured review-1"]

    async def test_without_before_after_gets_target(self):
        hooks = WriteHooks()
        seen = []

        async def after(context):
            seen.append(context)

        hooks.register(WriteOperation.CREATE, after=after)
        pending = await hooks.run_before(WriteOperation.CREATE, "review-2")
        await pending.complete()

        assert seen == ["review-2"]

    async def test_operations_are_separate(self):
        hooks = WriteHooks()

        async def after(context):
            raise AssertionError("should not run")

        hooks.register(WriteOperation.UPDATE, after=after)
        pending = await hooks.run_before(WriteOperation.CREATE, "review-3")
        await pending.complete()

        assert hooks.registered(WriteOperation.CREATE) == []


class TestTokens:

    def test_access_token_carries_subject_and_issue_time(self):
        subject = str(uuid4())
        issued_at = datetime.utcnow().replace(microsecond=0) - timedelta(seconds=30)
        payload = decode_access_token(create_access_token(subject, issued_at=issued_at))

        assert payload.subject == subject
        assert payload.issued_at == issued_at

    def test_foreign_signature_rejected(self):
        token = jwt.encode({"sub": str(uuid4()), "iat": 0}, "some-other-secret", algorithm="HS256")

        assert decode_access_token(token) is None
        assert decode_access_token("not.a.jwt") is None

    def test_expired_token_rejected(self):
        issued_at = datetime.utcnow() - timedelta(days=365)

        assert decode_access_token(create_access_token("someone", issued_at=issued_at)) is None

    def test_reset_token_digest(self):
        assert hash_reset_token("abc") == hash_reset_token("abc")
        assert hash_reset_token("abc") != hash_reset_token("abd")
        assert len(hash_reset_token("abc")) == 64

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("whatever", "not-a-bcrypt-hash") is False
        assert verify_password("whatever", None) is False


class TestEntityIds:

    def test_parse_and_print(self):
        raw = str(uuid4())
        assert str(UserId.from_str(raw)) == raw

    def test_kinds_never_compare_equal(self):
        value = uuid4()
        assert UserId(value) == UserId(value)
        assert UserId(value) != TourId(value)
        assert len({ReviewId(value), ReviewId(value)}) == 1

    def test_non_uuid_rejected(self):
        with pytest.raises(ValueError, match="Tour ID must be a valid UUID"):
            TourId("not-a-uuid")
        with pytest.raises(ValueError):
            UserId.from_str("not-a-uuid")
