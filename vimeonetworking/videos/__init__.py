from typing import Any, Dict, Optional, Union

from vimeonetworking._api_requester import APIRequester
from vimeonetworking.exceptions import VimeoAPIError
from vimeonetworking.videos.models import LiveModel, LiveStreamingStatus

__all__ = ["LiveModel", "LiveStreamingStatus", "VideoService"]


class VideoService:
    """
    Service for reading video resources from the Vimeo API.

    Attributes:
    -----------
    api_requester : APIRequester
        An instance of APIRequester used to send HTTP requests to the Vimeo API.
    """

    def __init__(self, api_requester: APIRequester):
        self.api_requester = api_requester

    @staticmethod
    def _video_path(video: Union[str, int]) -> str:
        video = str(video)
        if video.startswith("/"):
            return video
        return f"/videos/{video}"

    def get(self, video: Union[str, int], fields: Optional[str] = None) -> Dict[str, Any]:
        """
        Fetch a video.

        Parameters:
        -----------
        video : Union[str, int]
            The video ID, or its URI such as "/videos/123".
        fields : Optional[str]
            Comma separated list of fields to return.

        Returns:
        --------
        Dict[str, Any]
            The decoded video object.

        Raises:
        -------
        VimeoAPIError
            If the API returns an error response.
        """
        parameters = {"fields": fields} if fields else None
        return self._send_request("GET", self._video_path(video), parameters)

    def get_live(self, video: Union[str, int]) -> Optional[LiveModel]:
        """
        Fetch the live streaming state of a video.

        Returns:
        --------
        Optional[LiveModel]
            The live state, or None if the video is not a live video.

        Raises:
        -------
        VimeoAPIError
            If the API returns an error response.
        """
        body = self.get(video, fields="live")
        if not isinstance(body, dict):
            return None
        live = body.get("live")
        if not isinstance(live, dict):
            return None
        return LiveModel.from_dict(live)

    def _send_request(self, method: str, path: str, parameters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = self.api_requester.send_request(method, path, parameters)

        if response.status_code != 200:
            raise VimeoAPIError(
                f"API request failed with status {response.status_code}: {response.body}",
                status_code=response.status_code,
                body=response.body,
            )

        return response.body
