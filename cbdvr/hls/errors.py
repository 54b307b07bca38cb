class PlaylistError(Exception):
    pass


class ResolutionNotFoundError(PlaylistError):
    def __init__(self, resolution: int):
        super().__init__("resolution not found")
        self.resolution = resolution
