"""
Integration tests for profile, post and member type resolvers
"""

import uuid

import pytest

CREATE_PROFILE = """
mutation CreateProfile($dto: CreateProfileInput!) {
    createProfile(dto: $dto) { id isMale yearOfBirth userId memberTypeId }
}
"""

CREATE_POST = """
mutation CreatePost($dto: CreatePostInput!) {
    createPost(dto: $dto) { id title content authorId }
}
"""

CHANGE_PROFILE = """
mutation ChangeProfile($id: UUID!, $dto: ChangeProfileInput!) {
    changeProfile(id: $id, dto: $dto) { id isMale yearOfBirth userId memberTypeId }
}
"""


def codes(result):
    return [(error.extensions or {}).get("code") for error in (result.errors or [])]


def profile_dto(user_id, member_type="BASIC", **overrides):
    dto = {
        "isMale": True,
        "yearOfBirth": 1985,
        "userId": user_id,
        "memberTypeId": member_type,
    }
    dto.update(overrides)
    return dto


class TestMemberTypes:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_lists_seeded_member_types(self, execute):
        result = await execute("{ memberTypes { id discount postsLimitPerMonth } }")

        assert result.errors is None
        assert sorted(result.data["memberTypes"], key=lambda m: m["id"]) == [
            {"id": "BASIC", "discount": 2.3, "postsLimitPerMonth": 20},
            {"id": "BUSINESS", "discount": 7.7, "postsLimitPerMonth": 100},
        ]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_member_type_by_id(self, execute):
        result = await execute("{ memberType(id: BUSINESS) { id postsLimitPerMonth } }")

        assert result.errors is None
        assert result.data["memberType"] == {"id": "BUSINESS", "postsLimitPerMonth": 100}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_unknown_enum_value_is_rejected(self, execute):
        result = await execute("{ memberType(id: PREMIUM) { id } }")

        assert result.errors


class TestProfiles:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_created_profile_reads_back(self, execute, make_user):
        user = await make_user()

        created = await execute(CREATE_PROFILE, {"dto": profile_dto(user["id"])})
        assert created.errors is None
        profile = created.data["createProfile"]
        assert profile["isMale"] is True
        assert profile["yearOfBirth"] == 1985
        assert profile["userId"] == user["id"]
        assert profile["memberTypeId"] == "BASIC"

        result = await execute(
            """
            query($id: UUID!) {
                profile(id: $id) { id isMale yearOfBirth userId memberTypeId }
            }
            """,
            {"id": profile["id"]},
        )
        assert result.errors is None
        assert result.data["profile"] == profile

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_second_profile_for_user_fails_validation(self, execute, make_user):
        user = await make_user()
        await execute(CREATE_PROFILE, {"dto": profile_dto(user["id"])})

        result = await execute(CREATE_PROFILE, {"dto": profile_dto(user["id"], "BUSINESS")})

        assert result.data is None
        assert codes(result) == ["VALIDATION_FAILED"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_profile_for_missing_user_fails_validation(self, execute):
        result = await execute(CREATE_PROFILE, {"dto": profile_dto(str(uuid.uuid4()))})

        assert codes(result) == ["VALIDATION_FAILED"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_change_profile_switches_member_type(self, execute, make_user):
        user = await make_user()
        created = await execute(CREATE_PROFILE, {"dto": profile_dto(user["id"])})
        profile_id = created.data["createProfile"]["id"]

        result = await execute(
            """
            mutation($id: UUID!, $dto: ChangeProfileInput!) {
                changeProfile(id: $id, dto: $dto) {
                    yearOfBirth
                    memberType { id discount }
                }
            }
            """,
            {"id": profile_id, "dto": {"memberTypeId": "BUSINESS"}},
        )

        assert result.errors is None
        assert result.data["changeProfile"] == {
            "yearOfBirth": 1985,
            "memberType": {"id": "BUSINESS", "discount": 7.7},
        }

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_change_profile_with_empty_input_is_noop(self, execute, make_user):
        user = await make_user()
        created = await execute(CREATE_PROFILE, {"dto": profile_dto(user["id"])})
        profile = created.data["createProfile"]

        result = await execute(CHANGE_PROFILE, {"id": profile["id"], "dto": {}})

        assert result.errors is None
        assert result.data["changeProfile"] == profile

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_change_unknown_profile_reports_not_found(self, execute):
        result = await execute(
            CHANGE_PROFILE, {"id": str(uuid.uuid4()), "dto": {"yearOfBirth": 2000}}
        )

        assert result.data is None
        assert codes(result) == ["NOT_FOUND"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_delete_profile(self, execute, make_user):
        user = await make_user()
        created = await execute(CREATE_PROFILE, {"dto": profile_dto(user["id"])})
        profile_id = created.data["createProfile"]["id"]

        deleted = await execute(
            "mutation($id: UUID!) { deleteProfile(id: $id) }", {"id": profile_id}
        )
        assert deleted.data == {"deleteProfile": "Profile deleted"}

        again = await execute("mutation($id: UUID!) { deleteProfile(id: $id) }", {"id": profile_id})
        assert codes(again) == ["NOT_FOUND"]

        lookup = await execute("query($id: UUID!) { profile(id: $id) { id } }", {"id": profile_id})
        assert lookup.data == {"profile": None}


class TestPosts:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_created_post_reads_back(self, execute, make_user):
        author = await make_user()

        created = await execute(
            CREATE_POST,
            {"dto": {"title": "Hello", "content": "World", "authorId": author["id"]}},
        )
        assert created.errors is None
        post = created.data["createPost"]
        assert (post["title"], post["content"], post["authorId"]) == ("Hello", "World", author["id"])

        result = await execute(
            "query($id: UUID!) { post(id: $id) { id title content authorId } }",
            {"id": post["id"]},
        )
        assert result.data["post"] == post

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_post_for_missing_author_fails_validation(self, execute):
        result = await execute(
            CREATE_POST,
            {"dto": {"title": "t", "content": "c", "authorId": str(uuid.uuid4())}},
        )

        assert codes(result) == ["VALIDATION_FAILED"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_change_post_with_empty_input_is_noop(self, execute, make_user):
        author = await make_user()
        created = await execute(
            CREATE_POST,
            {"dto": {"title": "Hello", "content": "World", "authorId": author["id"]}},
        )
        post = created.data["createPost"]

        result = await execute(
            """
            mutation($id: UUID!, $dto: ChangePostInput!) {
                changePost(id: $id, dto: $dto) { id title content authorId }
            }
            """,
            {"id": post["id"], "dto": {}},
        )

        assert result.errors is None
        assert result.data["changePost"] == post

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_change_unknown_post_reports_not_found(self, execute):
        result = await execute(
            """
            mutation($id: UUID!, $dto: ChangePostInput!) {
                changePost(id: $id, dto: $dto) { id }
            }
            """,
            {"id": str(uuid.uuid4()), "dto": {"title": "New"}},
        )

        assert result.data is None
        assert codes(result) == ["NOT_FOUND"]

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_long_title_round_trips(self, execute, make_user):
        author = await make_user()
        title = "t" * 1000

        created = await execute(
            CREATE_POST,
            {"dto": {"title": title, "content": "c", "authorId": author["id"]}},
        )

        assert created.errors is None
        assert created.data["createPost"]["title"] == title

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_delete_post_then_lookup_is_null(self, execute, make_user):
        author = await make_user()
        created = await execute(
            CREATE_POST,
            {"dto": {"title": "Hello", "content": "World", "authorId": author["id"]}},
        )
        post_id = created.data["createPost"]["id"]

        deleted = await execute("mutation($id: UUID!) { deletePost(id: $id) }", {"id": post_id})
        assert deleted.data == {"deletePost": "Post deleted"}

        lookup = await execute("query($id: UUID!) { post(id: $id) { id } }", {"id": post_id})
        assert lookup.errors is None
        assert lookup.data == {"post": None}
