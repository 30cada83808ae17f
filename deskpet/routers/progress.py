from uuid import UUID

from fastapi import APIRouter, Depends

from deskpet.authentication.token_authentication import get_current_account_id
from deskpet.models.api_models import ClaimRewardModel, ProgressResponseModel, RewardResponseModel
from deskpet.routers.auth import get_account_service
from deskpet.services.account_service import AccountService

progress_router = APIRouter(tags=["Progress"])


class ProgressAPI:
    @staticmethod
    @progress_router.get("/progress", response_model=ProgressResponseModel)
    async def get_progress(
        account_id: UUID = Depends(get_current_account_id),
        account_service: AccountService = Depends(get_account_service),
    ) -> ProgressResponseModel:
        progress = await account_service.get_progress(account_id)
        return ProgressResponseModel(level=progress.level, rewards=progress.rewards)

    @staticmethod
    @progress_router.post("/claim-reward", response_model=RewardResponseModel)
    async def claim_reward(
        claim: ClaimRewardModel,
        account_id: UUID = Depends(get_current_account_id),
        account_service: AccountService = Depends(get_account_service),
    ) -> RewardResponseModel:
        """Claim the reward of a reached level

        Args:
            claim (ClaimRewardModel): level whose reward is claimed
            account_id (UUID): account resolved from the bearer token

        Returns:
            RewardResponseModel: level and rewards after the claim
        """
        progress, changed = await account_service.claim_level_reward(account_id, claim.level)
        message = (
            f"Reward for level {claim.level} claimed"
            if changed
            else f"Reward for level {claim.level} already claimed"
        )
        return RewardResponseModel(message=message, level=progress.level, rewards=progress.rewards)

    @staticmethod
    @progress_router.post("/reset-progress", response_model=RewardResponseModel)
    async def reset_progress(
        account_id: UUID = Depends(get_current_account_id),
        account_service: AccountService = Depends(get_account_service),
    ) -> RewardResponseModel:
        progress = await account_service.reset_progress(account_id)
        return RewardResponseModel(message="Progress reset", level=progress.level, rewards=progress.rewards)
