from .config import RunConfig
from .artifacts import ArtifactStore
from .models import MIXED, Mixed, Page, SelectionEnvelope, EmptySelection
