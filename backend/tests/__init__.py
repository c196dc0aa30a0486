# Force SQLModel table registration at test discovery time
import autobuild.models  # noqa: F401
