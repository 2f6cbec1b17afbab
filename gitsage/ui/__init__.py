"""Terminal presentation: message display, prompts, editing and spinners."""