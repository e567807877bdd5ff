from .deploy_form import DeployForm
from .deployments_page import DeploymentsPage
from .operations_console import OperationsConsole
