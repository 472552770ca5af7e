from TranslatorComponents.Types import ParseNodeId


class ProgressReport:
    def __init__(self):
        self.current_phase_number = ""
        self.action_bar_message = ""


class ParsingReport(ProgressReport):
    """
    Progress report for the parsing phase.
    Attributes:
        current_phase_number (str): The current phase number, automatically set to "1".
        node_count (int): Number of nodes in the produced tree.
    """
    def __init__(self):
        super().__init__()
        self.current_phase_number = "1"
        self.node_count: int = 0


class CodeGenerationReport(ProgressReport):
    """
    Progress report for the code generation phase.
    Attributes:
        current_phase_number (str): The current phase number, automatically set to "2".
        looked_at_tree_node_id (ParseNodeId | None): Id of the node the fragment was generated from.
        new_code (str | None): Fragment to append to the translation unit.
    """
    def __init__(self):
        super().__init__()
        self.current_phase_number = "2"
        self.looked_at_tree_node_id: ParseNodeId | None = None
        self.new_code: str | None = None


class BuildReport(ProgressReport):
    """
    Progress report for the native build phase.
    Attributes:
        current_phase_number (str): The current phase number, automatically set to "3".
        c_file (str | None): Path of the written C file.
        binary (str | None): Path of the produced executable.
    """
    def __init__(self):
        super().__init__()
        self.current_phase_number = "3"
        self.c_file: str | None = None
        self.binary: str | None = None
