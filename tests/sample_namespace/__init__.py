from otter import OtterResource
import sample_models as models


class Tag(OtterResource):
    model = models.Tag
