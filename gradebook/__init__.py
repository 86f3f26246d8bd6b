"""School gradebook: student records, score entry and term report grading."""
