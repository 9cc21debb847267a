# Role: Shared singletons for the API routers. FlowController holds no per-conversation state,
# so one instance serves every request.

from backend.core.flow_controller import FlowController

flow_controller = FlowController()


def get_flow_controller() -> FlowController:
    return flow_controller
