from otter import OtterResource
import sample_models as models


class User(OtterResource):
    model = models.User
    title = "Users"

    @classmethod
    def fields(cls):
        return {"name": "string", "email": "string", "password": "password"}

    @classmethod
    def hidden(cls):
        return ["password", "not_a_field"]

    @classmethod
    def relations(cls):
        return {"profile": "Profile"}


class Profile(OtterResource):
    model = models.Profile

    @classmethod
    def relations(cls):
        return {"user": "User"}


class Post(OtterResource):
    model = models.Post
    title = "Blog Posts"

    @classmethod
    def fields(cls):
        return {"title": "string", "slug": "string", "body": "text", "user_id": "integer"}

    @classmethod
    def hidden(cls):
        return ["body"]

    @classmethod
    def relations(cls):
        return {"author": "User", "tags": ["Tag", "tag_id"], "comments": "Comment"}


class Tag(OtterResource):
    model = models.Tag


class Comment(OtterResource):
    model = models.Comment

    @classmethod
    def relations(cls):
        return {"post": "Post"}
