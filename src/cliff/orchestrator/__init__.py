"""Plan execution: confirmation, dispatch, history and recovery."""
