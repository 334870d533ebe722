from okr_app.services.score_levels import scoring_context


class ScoringContextMixin:
    """
    Serves the whole request from one snapshot of the score level directory.

    Nested serializers pick the snapshot up from the serializer context
    (``scoring_context``) instead of reloading it per key result.
    """
    scoring_ctx = None

    def dispatch(self, request, *args, **kwargs):
        with scoring_context() as ctx:
            self.scoring_ctx = ctx
            return super().dispatch(request, *args, **kwargs)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["scoring_context"] = self.scoring_ctx
        return context
