## global vars / constants

DEBUG = False

# sentinel tokens that can replace a number in a count column
NOT_AVAILABLE = "NA"
NOT_EVALUATED = "ne"

config = {
    #########################
    # input/output layout
    "splicing_dir": "to_combine",
    "expression_dir": "expr_out",
    "archive_subdir": "PARTS",  # consumed subsample files get moved here with --move_to_PARTS
    #
    ####################
    # file suffixes per format
    "suffix_IR": ".IR",
    "suffix_IR2": ".IR2",
    "suffix_IR_summary": ".IR.summary_v2.txt",
    "suffix_microexon": ".micX",
    "suffix_exon_skip": ".exskX",
    "suffix_multi_exon": ".MULTI3X",
    "suffix_junction": ".eej2",
    "suffix_expression": ".cRPKM",
    #
    ####################
    # expression
    "effective_length_template": "{db_dir}/{species}/EXPRESSION/{species}_mRNA-50.eff",
    "cRPKM_decimal_places": 2,
    #
    ####################
    # splicing stats
    "PSI_decimal_places": 2,
    # complexity tiers (divisor, tier), evaluated in order: tier if non-reference reads > total / divisor
    "complexity_tiers": [(2, "C3"), (5, "C2"), (20, "C1")],
    "complexity_reference_only": "S",
    #
    ######
    # progress monitoring
    "show_progress": True,
}
