from app.schemas.projects import ProjectCreateRequest, ProjectUpdateRequest, ReviewRequest, ProjectResponse
from app.schemas.assets import AssetCreateRequest, AssetResponse, UnlistResponse
from app.schemas.investments import InvestmentCreateRequest, InvestmentResponse
